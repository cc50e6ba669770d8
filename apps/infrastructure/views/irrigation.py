import logging

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict, NotFound
from apps.core.http import read_json, request_username
from apps.core.models import Aksi
from apps.core.parsing import Coerce, current_year, path_id, path_year, query_limit, require_str
from apps.core.serialization import api_response, model_to_dict
from apps.core.updates import update_from_year, whitelist
from apps.regions.services import KecamatanService
from ..models import Irigasi, RefIrigasi
from ..queries import IrigasiQuery, RefIrigasiQuery

logger = logging.getLogger(__name__)

IRIGASI_MEASURES = (
    'luas', 'konirigasibaik', 'konirigasisedang', 'konirigasirusakringan', 'konirigasirusakberat',
)


def require_known_kecamatan(kdkecamatan):
    if not KecamatanService.exists(kdkecamatan):
        raise BadRequest(f'kdkecamatan {kdkecamatan} tidak ditemukan di refkecamatan')


# Irigasi (reference)

@api_view(['GET', 'POST'])
def ref_irigasi_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        values = {
            'msirigasi': require_str(body, 'msirigasi', max_length=255),
            'kdkecamatan': require_str(body, 'kdkecamatan', max_length=10),
        }
        require_known_kecamatan(values['kdkecamatan'])

        kdirigasi = Coerce.to_int(body.get('kdirigasi'))
        if kdirigasi is not None:
            if RefIrigasi.objects.filter(kdirigasi=kdirigasi).exists():
                raise Conflict(f'kdirigasi {kdirigasi} sudah digunakan')
            values['kdirigasi'] = kdirigasi

        irigasi = RefIrigasi.objects.create(**values)
        logger.info(f"Created irigasi {irigasi.kdirigasi} - {irigasi.msirigasi}")
        return api_response(RefIrigasiQuery.single(irigasi.kdirigasi), status=201)

    rows = RefIrigasiQuery.search(
        term=Coerce.to_str(request.GET.get('search')),
        kdkecamatan=Coerce.to_str(request.GET.get('kdkecamatan')),
    )
    return api_response(rows)


@api_view(['GET', 'PUT', 'DELETE'])
def ref_irigasi_detail(request, kdirigasi):
    kdirigasi = path_id(kdirigasi, 'kdirigasi')
    irigasi = RefIrigasi.objects.filter(kdirigasi=kdirigasi).first()
    if irigasi is None:
        raise NotFound(f'Irigasi dengan kdirigasi {kdirigasi} tidak ditemukan')

    if request.method == 'DELETE':
        irigasi.delete()
        return api_response({'ok': True, 'message': f'Irigasi {kdirigasi} berhasil dihapus'})

    if request.method == 'PUT':
        body = read_json(request)
        data = whitelist(body, {
            'msirigasi': lambda v: Coerce.to_str(v, max_length=255, field='msirigasi'),
            'kdkecamatan': lambda v: Coerce.to_str(v, max_length=10, field='kdkecamatan'),
        })
        if 'kdkecamatan' in data:
            require_known_kecamatan(data['kdkecamatan'])
        RefIrigasi.objects.filter(kdirigasi=kdirigasi).update(**data)

    return api_response(RefIrigasiQuery.single(kdirigasi))


# Kondisi irigasi per tahun

@api_view(['GET', 'POST'])
def irigasi_collection(request):
    if request.method == 'POST':
        return create_irigasi(request)

    kdirigasi = Coerce.to_int(request.GET.get('kdirigasi'))
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if kdirigasi and tahun:
        row = IrigasiQuery.single(kdirigasi, tahun)
        if row is None:
            raise NotFound('Data tidak ditemukan')
        return api_response(row)

    rows = IrigasiQuery.search(
        kdirigasi=kdirigasi,
        tahun=tahun,
        term=Coerce.to_str(request.GET.get('search')),
        limit=query_limit(request),
    )
    return api_response(rows)


@api_view(['GET'])
def irigasi_previous_year(request):
    """Rows of the year before ?tahun (default: the year before the current one)"""
    tahun = Coerce.to_int(request.GET.get('tahun')) or current_year()
    previous = tahun - 1
    kdirigasi = Coerce.to_int(request.GET.get('kdirigasi'))

    if kdirigasi:
        row = IrigasiQuery.single(kdirigasi, previous)
        if row is None:
            raise NotFound(f'Data irigasi {kdirigasi} tahun {previous} tidak ditemukan')
        return api_response(row)

    rows = IrigasiQuery.search(
        tahun=previous,
        term=Coerce.to_str(request.GET.get('search')),
        limit=query_limit(request),
    )
    return api_response(rows)


def create_irigasi(request):
    body = read_json(request)

    kdirigasi = Coerce.to_int(body.get('kdirigasi'))
    if kdirigasi is None or kdirigasi <= 0:
        raise BadRequest('kdirigasi wajib angka > 0')
    tahun = Coerce.to_int(body.get('tahun'))
    if tahun is None or tahun <= 0:
        raise BadRequest('tahun wajib angka > 0')

    reference = RefIrigasi.objects.filter(kdirigasi=kdirigasi).first()
    kdkecamatan = Coerce.to_str(body.get('kdkecamatan')) or (reference.kdkecamatan if reference else None)
    if not kdkecamatan or len(kdkecamatan) > 10:
        raise BadRequest('kdkecamatan wajib diisi (maks 10 karakter)')

    if Irigasi.objects.filter(kdirigasi=kdirigasi, tahun=tahun).exists():
        raise Conflict('Data irigasi untuk kdirigasi+tahun sudah ada')

    irigasi = Irigasi.objects.create(
        kdirigasi=kdirigasi,
        tahun=tahun,
        kdkecamatan=kdkecamatan,
        nmirigasi=reference.msirigasi if reference else Coerce.to_str(body.get('msirigasi')),
        nmkecamatan=KecamatanService.name_for(kdkecamatan) or Coerce.to_str(body.get('nmkecamatan')),
        **{field: Coerce.to_decimal(body.get(field)) for field in IRIGASI_MEASURES},
        verif=bool(Coerce.to_bool(body.get('verif'))),
        username=request_username(request, body),
        aksi=Aksi.CREATE,
    )
    logger.info(f"Created kondisi irigasi {irigasi}")
    return api_response(model_to_dict(irigasi), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def irigasi_detail(request, kdirigasi, tahun):
    kdirigasi = path_id(kdirigasi, 'kdirigasi')
    tahun = path_year(tahun)

    if request.method == 'PUT':
        body = read_json(request)
        data = whitelist(body, {
            'nmirigasi': lambda v: Coerce.to_str(v, max_length=255, field='nmirigasi'),
            'kdkecamatan': lambda v: Coerce.to_str(v, max_length=10, field='kdkecamatan'),
            'nmkecamatan': lambda v: Coerce.to_str(v, max_length=100, field='nmkecamatan'),
            **{field: Coerce.to_decimal for field in IRIGASI_MEASURES},
            'verif': Coerce.to_bool,
        })
        return api_response(update_from_year(Irigasi, request, body, {'kdirigasi': kdirigasi}, tahun, data))

    irigasi = Irigasi.objects.filter(kdirigasi=kdirigasi, tahun=tahun).first()
    if irigasi is None:
        raise NotFound('Data tidak ditemukan')

    if request.method == 'DELETE':
        irigasi.delete()
        return api_response({'message': 'Data berhasil dihapus'})

    return api_response(model_to_dict(irigasi))
