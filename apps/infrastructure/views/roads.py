import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict, NotFound
from apps.core.http import read_json, request_username
from apps.core.models import Aksi
from apps.core.parsing import Coerce, path_id, path_year, query_limit, require_str
from apps.core.serialization import api_response, model_to_dict
from apps.core.updates import update_from_year, whitelist
from apps.regions.services import KecamatanService
from ..models import JalanKondisi, RuasJalan
from ..queries import JalanKondisiQuery

logger = logging.getLogger(__name__)

RUAS_MEASURES = (
    'hotmix', 'lapenmakadam', 'lebarruas', 'panjangruas',
    'perkerasanbeton', 'tanahbelumtembus', 'telfordkerikil',
)

KONDISI_MEASURES = ('kondisibaik', 'kondisisedang', 'kondisirusakringan', 'kondisirusakberat')


def text(max_length, field):
    return lambda value: Coerce.to_str(value, max_length=max_length, field=field)


# Ruas jalan (reference)

@api_view(['GET', 'POST'])
def ruas_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        values = {
            'namaruasjalan': require_str(body, 'namaruasjalan', max_length=255),
            'kdkecamatan': require_str(body, 'kdkecamatan', max_length=10),
            'nmkecamatan': Coerce.to_str(body.get('nmkecamatan'), max_length=100, field='nmkecamatan'),
        }
        for field in RUAS_MEASURES:
            values[field] = Coerce.to_decimal(body.get(field))

        noruas = Coerce.to_int(body.get('noruas'))
        if noruas is not None:
            if RuasJalan.objects.filter(noruas=noruas).exists():
                raise Conflict('Data duplikat (nilai unik sudah digunakan)')
            values['noruas'] = noruas

        if not values['nmkecamatan']:
            values['nmkecamatan'] = KecamatanService.name_for(values['kdkecamatan'])

        ruas = RuasJalan.objects.create(**values)
        logger.info(f"Created ruas jalan {ruas}")
        return api_response(model_to_dict(ruas), status=201)

    ruas = RuasJalan.objects.all()
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        ruas = ruas.filter(
            Q(namaruasjalan__icontains=search)
            | Q(kdkecamatan__icontains=search)
            | Q(nmkecamatan__icontains=search)
        )
    kdkecamatan = Coerce.to_str(request.GET.get('kdkecamatan'))
    if kdkecamatan:
        ruas = ruas.filter(kdkecamatan=kdkecamatan)

    return api_response([model_to_dict(r) for r in ruas])


@api_view(['GET', 'PUT', 'DELETE'])
def ruas_detail(request, noruas):
    ruas = get_object_or_404(RuasJalan, noruas=path_id(noruas, 'noruas'))

    if request.method == 'DELETE':
        ruas.delete()
        return api_response({'ok': True, 'message': f'Ruas jalan {ruas.namaruasjalan} berhasil dihapus'})

    if request.method == 'PUT':
        body = read_json(request)
        parsers = {
            'namaruasjalan': text(255, 'namaruasjalan'),
            'kdkecamatan': text(10, 'kdkecamatan'),
            'nmkecamatan': text(100, 'nmkecamatan'),
            **{field: Coerce.to_decimal for field in RUAS_MEASURES},
        }
        data = whitelist(body, parsers)
        RuasJalan.objects.filter(noruas=ruas.noruas).update(**data)
        ruas.refresh_from_db()

    row = model_to_dict(ruas)
    if not row['nmkecamatan']:
        row['nmkecamatan'] = KecamatanService.name_for(ruas.kdkecamatan)
    return api_response(row)


# Kondisi jalan per tahun

@api_view(['GET', 'POST'])
def kondisi_collection(request):
    if request.method == 'POST':
        return create_kondisi(request)

    noruas = Coerce.to_int(request.GET.get('noruas'))
    if noruas:
        row = JalanKondisiQuery.first_for_ruas(noruas)
        if row is None:
            raise NotFound('Data tidak ditemukan')
        return api_response(row)

    rows = JalanKondisiQuery.search(Coerce.to_str(request.GET.get('search')), query_limit(request))
    return api_response(rows)


def create_kondisi(request):
    body = read_json(request)

    tahun = Coerce.to_int(body.get('tahun'))
    if tahun is None or tahun <= 0:
        raise BadRequest('tahun wajib integer > 0')
    noruas = Coerce.to_int(body.get('noruas'))
    if noruas is None or noruas <= 0:
        raise BadRequest('noruas wajib integer > 0')

    kdkecamatan = Coerce.to_str(body.get('kdkecamatan'))
    nmkecamatan = Coerce.to_str(body.get('nmkecamatan'))
    namaruasjalan = Coerce.to_str(body.get('namaruasjalan'))

    if not kdkecamatan:
        ruas = RuasJalan.objects.filter(noruas=noruas).first()
        if ruas is None or not ruas.kdkecamatan:
            raise BadRequest('kdkecamatan tidak dikirim dan tidak ditemukan pada tblruasjalan')
        kdkecamatan = ruas.kdkecamatan
        nmkecamatan = nmkecamatan or ruas.nmkecamatan
        namaruasjalan = namaruasjalan or ruas.namaruasjalan

    if len(kdkecamatan) > 10:
        raise BadRequest('kdkecamatan wajib diisi (maks 10 karakter)')
    if nmkecamatan and len(nmkecamatan) > 100:
        raise BadRequest('nmkecamatan maksimal 100 karakter')
    if namaruasjalan and len(namaruasjalan) > 255:
        raise BadRequest('namaruasjalan maksimal 255 karakter')

    if not nmkecamatan:
        nmkecamatan = KecamatanService.name_for(kdkecamatan)

    if JalanKondisi.objects.filter(noruas=noruas, tahun=tahun).exists():
        raise Conflict(f'Data untuk noruas={noruas} dan tahun={tahun} sudah ada')

    kondisi = JalanKondisi.objects.create(
        noruas=noruas,
        namaruasjalan=namaruasjalan,
        kdkecamatan=kdkecamatan,
        nmkecamatan=nmkecamatan,
        tahun=tahun,
        **{field: Coerce.to_decimal(body.get(field)) for field in KONDISI_MEASURES},
        lhr=Coerce.to_int(body.get('lhr')),
        akses=Coerce.to_str(body.get('akses'), max_length=100, field='akses'),
        verif=Coerce.to_bool(body.get('verif')),
        username=request_username(request, body),
        aksi=Aksi.CREATE,
    )
    logger.info(f"Created kondisi jalan {kondisi}")
    return api_response(model_to_dict(kondisi), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def kondisi_detail(request, noruas, tahun):
    noruas = path_id(noruas, 'noruas')
    tahun = path_year(tahun)

    if request.method == 'PUT':
        body = read_json(request)
        parsers = {
            'namaruasjalan': text(255, 'namaruasjalan'),
            'kdkecamatan': text(10, 'kdkecamatan'),
            'nmkecamatan': text(100, 'nmkecamatan'),
            **{field: Coerce.to_decimal for field in KONDISI_MEASURES},
            'lhr': Coerce.to_int,
            'akses': text(100, 'akses'),
            'verif': Coerce.to_bool,
        }
        data = whitelist(body, parsers)
        return api_response(update_from_year(JalanKondisi, request, body, {'noruas': noruas}, tahun, data))

    if request.method == 'DELETE':
        deleted, _ = JalanKondisi.objects.filter(noruas=noruas, tahun=tahun).delete()
        if not deleted:
            raise NotFound('Data tidak ditemukan')
        return api_response({'message': 'Data berhasil dihapus', 'deleted': deleted})

    kondisi = JalanKondisi.objects.filter(noruas=noruas, tahun=tahun).first()
    if kondisi is None:
        raise NotFound('Data tidak ditemukan')
    return api_response(model_to_dict(kondisi))
