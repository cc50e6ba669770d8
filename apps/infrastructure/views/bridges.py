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
from ..models import Jembatan, Kondisi, RefJembatan

logger = logging.getLogger(__name__)

JEMBATAN_FIELDS = (
    'id', 'kdkecamatan', 'nmkecamatan', 'jembatan_id', 'nama_jembatan', 'panjang_m',
    'tahun_bangun', 'kondisi', 'aktif', 'created_at', 'updated_at', 'tahun',
)


def jembatan_row(jembatan):
    return model_to_dict(jembatan, fields=JEMBATAN_FIELDS) if jembatan else None


def parse_kondisi(value):
    kondisi = Coerce.to_str(value)
    if kondisi is None:
        return None
    if kondisi not in Kondisi.values:
        raise BadRequest(f"kondisi tidak valid. Pilih salah satu: {', '.join(Kondisi.values)}")
    return kondisi


# Jembatan (reference)

@api_view(['GET', 'POST'])
def ref_jembatan_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        values = {
            'nmjembatan': require_str(body, 'nmjembatan', max_length=255),
            'kdkecamatan': require_str(body, 'kdkecamatan', max_length=10),
        }
        if body.get('kdjembatan') is not None:
            kdjembatan = Coerce.to_int(body['kdjembatan'])
            if kdjembatan is None:
                raise BadRequest(f"Nilai integer tidak valid: {body['kdjembatan']}")
            if RefJembatan.objects.filter(kdjembatan=kdjembatan).exists():
                raise Conflict('Data duplikat (nilai unik/ID sudah digunakan)')
            values['kdjembatan'] = kdjembatan

        jembatan = RefJembatan.objects.create(**values)
        return api_response(model_to_dict(jembatan), status=201)

    jembatan = RefJembatan.objects.all()
    kdjembatan = Coerce.to_int(request.GET.get('kdjembatan'))
    if kdjembatan is not None:
        jembatan = jembatan.filter(kdjembatan=kdjembatan)
    kdkecamatan = Coerce.to_str(request.GET.get('kdkecamatan'))
    if kdkecamatan:
        jembatan = jembatan.filter(kdkecamatan=kdkecamatan)
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        jembatan = jembatan.filter(Q(nmjembatan__icontains=search) | Q(kdkecamatan__icontains=search))

    return api_response([model_to_dict(j) for j in jembatan])


@api_view(['GET', 'PUT', 'DELETE'])
def ref_jembatan_detail(request, kdjembatan):
    kdjembatan = path_id(kdjembatan, 'kdjembatan')
    jembatan = RefJembatan.objects.filter(kdjembatan=kdjembatan).first()
    if jembatan is None:
        raise NotFound(f'Jembatan dengan ID {kdjembatan} tidak ditemukan')

    if request.method == 'DELETE':
        jembatan.delete()
        return api_response({'ok': True, 'message': f'Jembatan ID {kdjembatan} berhasil dihapus'})

    if request.method == 'PUT':
        body = read_json(request)
        if body.get('kdjembatan') is not None and Coerce.to_int(body['kdjembatan']) != kdjembatan:
            raise BadRequest('kdjembatan tidak boleh diubah; gunakan path parameter')
        data = whitelist(body, {
            'nmjembatan': lambda v: Coerce.to_str(v, max_length=255, field='nmjembatan'),
            'kdkecamatan': lambda v: Coerce.to_str(v, max_length=10, field='kdkecamatan'),
        })
        RefJembatan.objects.filter(kdjembatan=kdjembatan).update(**data)
        jembatan.refresh_from_db()

    return api_response(model_to_dict(jembatan))


# Kondisi jembatan per tahun

@api_view(['GET', 'POST'])
def jembatan_collection(request):
    if request.method == 'POST':
        return create_jembatan(request)

    params = request.GET
    if params.get('id'):
        pk = Coerce.to_bigint(params['id'])
        if not pk:
            raise BadRequest('id tidak valid')
        return api_response(jembatan_row(get_object_or_404(Jembatan, id=pk)))

    only_jembatan_id = params.get('jembatan_id') and not any(
        key in params for key in ('search', 'kdkecamatan', 'kondisi', 'aktif')
    )
    if only_jembatan_id:
        jembatan_id = Coerce.to_bigint(params['jembatan_id'])
        if not jembatan_id:
            raise BadRequest('jembatan_id tidak valid')
        latest = Jembatan.objects.filter(jembatan_id=jembatan_id).order_by('-updated_at', '-id').first()
        if latest is None:
            raise NotFound('Data tidak ditemukan')
        return api_response(jembatan_row(latest))

    jembatan = Jembatan.objects.all()
    jembatan_id = Coerce.to_bigint(params.get('jembatan_id'))
    if jembatan_id:
        jembatan = jembatan.filter(jembatan_id=jembatan_id)
    kdkecamatan = Coerce.to_bigint(params.get('kdkecamatan'))
    if kdkecamatan:
        jembatan = jembatan.filter(kdkecamatan=kdkecamatan)
    kondisi = Coerce.to_str(params.get('kondisi'))
    if kondisi:
        if kondisi not in Kondisi.values:
            raise BadRequest('kondisi tidak valid')
        jembatan = jembatan.filter(kondisi=kondisi)
    if params.get('aktif') is not None:
        jembatan = jembatan.filter(aktif=params['aktif'].strip().lower() == 'true')
    search = Coerce.to_str(params.get('search'))
    if search:
        query = Q(nama_jembatan__icontains=search) | Q(nmkecamatan__icontains=search)
        if search.isdigit():
            query |= Q(jembatan_id=int(search)) | Q(kdkecamatan=int(search))
        jembatan = jembatan.filter(query)

    jembatan = jembatan.order_by('-updated_at', '-id')[:query_limit(request)]
    return api_response([jembatan_row(j) for j in jembatan])


def create_jembatan(request):
    body = read_json(request)

    kdkecamatan = Coerce.to_bigint(body.get('kdkecamatan'))
    if not kdkecamatan:
        raise BadRequest('kdkecamatan wajib bilangan bulat > 0')
    jembatan_id = Coerce.to_bigint(body.get('jembatan_id'))
    if not jembatan_id:
        raise BadRequest('jembatan_id wajib bilangan bulat > 0')

    nama = Coerce.to_str(body.get('nama_jembatan'))
    if not nama:
        raise BadRequest('nama_jembatan wajib diisi')
    if len(nama) > 150:
        raise BadRequest('nama_jembatan maksimal 150 karakter')

    if not Coerce.to_str(body.get('kondisi')):
        raise BadRequest('kondisi wajib diisi')
    kondisi = parse_kondisi(body['kondisi'])

    tahun = Coerce.to_year(body.get('tahun'))
    if tahun is None:
        raise BadRequest('tahun wajib 4 digit (mis. 2025)')

    tahun_bangun = None
    if body.get('tahun_bangun') is not None:
        tahun_bangun = Coerce.to_year(body['tahun_bangun'])
        if tahun_bangun is None:
            raise BadRequest('tahun_bangun harus 4 digit (mis. 2015)')

    if Jembatan.objects.filter(jembatan_id=jembatan_id, tahun=tahun).exists():
        raise Conflict(f'Data untuk jembatan_id={jembatan_id} dan tahun={tahun} sudah ada')

    jembatan = Jembatan.objects.create(
        kdkecamatan=kdkecamatan,
        nmkecamatan=Coerce.to_str(body.get('nmkecamatan'), max_length=100, field='nmkecamatan'),
        jembatan_id=jembatan_id,
        nama_jembatan=nama,
        panjang_m=Coerce.to_decimal(body.get('panjang_m')),
        tahun_bangun=tahun_bangun,
        kondisi=kondisi,
        aktif=True if body.get('aktif') is None else Coerce.to_bool(body['aktif']),
        tahun=tahun,
        username=request_username(request, body),
        aksi=Aksi.CREATE,
    )
    logger.info(f"Created kondisi jembatan {jembatan}")
    return api_response(jembatan_row(jembatan), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def jembatan_detail(request, jembatan_id, tahun):
    jembatan_id = path_id(jembatan_id, 'jembatan_id')
    tahun = path_year(tahun)

    if request.method == 'PUT':
        body = read_json(request)
        data = whitelist(body, {
            'kdkecamatan': Coerce.to_bigint,
            'nmkecamatan': lambda v: Coerce.to_str(v, max_length=100, field='nmkecamatan'),
            'nama_jembatan': lambda v: Coerce.to_str(v, max_length=150, field='nama_jembatan'),
            'panjang_m': Coerce.to_decimal,
            'tahun_bangun': Coerce.to_year,
            'kondisi': parse_kondisi,
            'aktif': Coerce.to_bool,
        })
        result = update_from_year(Jembatan, request, body, {'jembatan_id': jembatan_id}, tahun, data)
        result['sample'] = jembatan_row(Jembatan.objects.filter(jembatan_id=jembatan_id, tahun=tahun).first())
        return api_response(result)

    if request.method == 'DELETE':
        deleted, _ = Jembatan.objects.filter(jembatan_id=jembatan_id, tahun=tahun).delete()
        if not deleted:
            raise NotFound('Data tidak ditemukan')
        return api_response({'message': 'Data berhasil dihapus'})

    jembatan = Jembatan.objects.filter(jembatan_id=jembatan_id, tahun=tahun).first()
    if jembatan is None:
        raise NotFound('Data tidak ditemukan')
    return api_response(jembatan_row(jembatan))
