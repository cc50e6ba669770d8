import logging

from django.shortcuts import get_object_or_404

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict, NotFound
from apps.core.http import read_json
from apps.core.models import Aksi
from apps.core.parsing import Coerce, path_id, path_year, query_limit, require_str
from apps.core.serialization import api_response, model_to_dict
from apps.core.updates import update_from_year, whitelist
from ..models import AksesAirMinum, CakupanTelekomunikasi, DayaListrik

logger = logging.getLogger(__name__)


def require_all(body, fields):
    if any(Coerce.is_blank(body.get(field)) for field in fields):
        raise BadRequest('Semua field wajib diisi')


def strict_int(body, field):
    value = Coerce.to_int(body[field])
    if value is None:
        raise BadRequest(f'{field} harus berupa bilangan bulat')
    return value


# Akses air minum

AIR_FIELDS = ('tahun', 'jmlpenduduk', 'jmlairminumlayak', 'persentaseairminum', 'kdkecamatan', 'nmkecamatan')


def air_row(akses):
    row = model_to_dict(akses)
    row['id'] = str(akses.id)
    return row


def parse_air(body):
    require_all(body, AIR_FIELDS)
    return {
        'tahun': strict_int(body, 'tahun'),
        'jmlpenduduk': strict_int(body, 'jmlpenduduk'),
        'jmlairminumlayak': strict_int(body, 'jmlairminumlayak'),
        'persentaseairminum': Coerce.to_decimal(body['persentaseairminum']),
        'kdkecamatan': Coerce.to_str(body['kdkecamatan'], max_length=10, field='kdkecamatan'),
        'nmkecamatan': Coerce.to_str(body['nmkecamatan'], max_length=100, field='nmkecamatan'),
    }


@api_view(['GET', 'POST'])
def air_minum_collection(request):
    if request.method == 'POST':
        values = parse_air(read_json(request))
        if AksesAirMinum.objects.filter(kdkecamatan=values['kdkecamatan'], tahun=values['tahun']).exists():
            raise Conflict('Data dengan kecamatan dan tahun ini sudah ada')
        akses = AksesAirMinum.objects.create(**values)
        logger.info(f"Created akses air minum {akses}")
        return api_response(air_row(akses), status=201)

    return api_response([air_row(a) for a in AksesAirMinum.objects.all()])


@api_view(['GET', 'PUT', 'DELETE'])
def air_minum_detail(request, id):
    akses = get_object_or_404(AksesAirMinum, id=path_id(id))

    if request.method == 'DELETE':
        data = air_row(akses)
        akses.delete()
        return api_response({'message': 'Data berhasil dihapus', 'data': data})

    if request.method == 'PUT':
        values = parse_air(read_json(request))
        duplicate = (
            AksesAirMinum.objects.filter(kdkecamatan=values['kdkecamatan'], tahun=values['tahun'])
            .exclude(id=akses.id)
            .exists()
        )
        if duplicate:
            raise Conflict('Kombinasi kecamatan dan tahun sudah ada di database')
        for field, value in values.items():
            setattr(akses, field, value)
        akses.save()

    return api_response(air_row(akses))


# Ketersediaan listrik

LISTRIK_FIELDS = ('nmkecamatan', 'tahun', 'dayatersedia', 'dayadibutuhkan')


def listrik_row(listrik):
    row = model_to_dict(listrik)
    row['id'] = str(listrik.id)
    return row


def parse_listrik(body):
    require_all(body, LISTRIK_FIELDS)
    # rasiopersen is always derived from the two capacities
    return {
        'nmkecamatan': Coerce.to_str(body['nmkecamatan'], max_length=100, field='nmkecamatan'),
        'tahun': strict_int(body, 'tahun'),
        'dayatersedia': Coerce.to_decimal(body['dayatersedia']),
        'dayadibutuhkan': Coerce.to_decimal(body['dayadibutuhkan']),
    }


@api_view(['GET', 'POST'])
def listrik_collection(request):
    if request.method == 'POST':
        values = parse_listrik(read_json(request))
        if DayaListrik.objects.filter(nmkecamatan=values['nmkecamatan'], tahun=values['tahun']).exists():
            raise Conflict('Kombinasi kecamatan dan tahun sudah ada di database')
        listrik = DayaListrik.objects.create(**values)
        logger.info(f"Created daya listrik {listrik} ({listrik.rasiopersen}%)")
        return api_response(listrik_row(listrik), status=201)

    return api_response([listrik_row(d) for d in DayaListrik.objects.all()])


@api_view(['GET', 'PUT', 'DELETE'])
def listrik_detail(request, id):
    listrik = get_object_or_404(DayaListrik, id=path_id(id))

    if request.method == 'DELETE':
        data = listrik_row(listrik)
        listrik.delete()
        return api_response({'message': 'Data berhasil dihapus', 'data': data})

    if request.method == 'PUT':
        values = parse_listrik(read_json(request))
        duplicate = (
            DayaListrik.objects.filter(nmkecamatan=values['nmkecamatan'], tahun=values['tahun'])
            .exclude(id=listrik.id)
            .exists()
        )
        if duplicate:
            raise Conflict('Kombinasi kecamatan dan tahun sudah ada di database')
        for field, value in values.items():
            setattr(listrik, field, value)
        listrik.save()

    return api_response(listrik_row(listrik))


# Cakupan telekomunikasi

@api_view(['GET', 'POST'])
def telekomunikasi_collection(request):
    if request.method == 'POST':
        body = read_json(request)

        tahun = Coerce.to_int(body.get('tahun'))
        if tahun is None or tahun <= 0:
            raise BadRequest('tahun wajib angka > 0')
        totaldesa = Coerce.to_int(body.get('total_desa'))
        if totaldesa is None or totaldesa < 0:
            raise BadRequest('total_desa wajib angka >= 0')
        desaterlayani = Coerce.to_int(body.get('desa_terlayani'))
        if desaterlayani is None or desaterlayani < 0:
            raise BadRequest('desa_terlayani wajib angka >= 0')
        username = Coerce.to_str(body.get('username'))
        if not username:
            raise BadRequest('username wajib diisi')
        kdtelekomunikasi = require_str(body, 'kdtelekomunikasi', max_length=20)

        if CakupanTelekomunikasi.objects.filter(kdtelekomunikasi=kdtelekomunikasi, tahun=tahun).exists():
            raise Conflict(f'Data untuk kdtelekomunikasi={kdtelekomunikasi} dan tahun={tahun} sudah ada')

        cakupan = CakupanTelekomunikasi.objects.create(
            kdtelekomunikasi=kdtelekomunikasi,
            tahun=tahun,
            totaldesa=totaldesa,
            desaterlayani=desaterlayani,
            username=username,
            aksi=Coerce.to_str(body.get('aksi')) or Aksi.CREATE,
        )
        logger.info(f"Created cakupan telekomunikasi {cakupan}")
        return api_response(model_to_dict(cakupan), status=201)

    pk = Coerce.to_int(request.GET.get('id'))
    if pk:
        cakupan = CakupanTelekomunikasi.objects.filter(id=pk).first()
        if cakupan is None:
            raise NotFound('Data tidak ditemukan')
        return api_response(model_to_dict(cakupan))

    cakupan = CakupanTelekomunikasi.objects.all()
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if tahun:
        cakupan = cakupan.filter(tahun=tahun)
    cakupan = cakupan.order_by('-tahun', 'id')[:query_limit(request)]
    return api_response([model_to_dict(c) for c in cakupan])


@api_view(['GET', 'PUT', 'DELETE'])
def telekomunikasi_detail(request, kdtelekomunikasi, tahun):
    kdtelekomunikasi = Coerce.to_str(kdtelekomunikasi)
    if not kdtelekomunikasi:
        raise BadRequest('kdtelekomunikasi tidak valid')
    tahun = path_year(tahun)
    key = {'kdtelekomunikasi': kdtelekomunikasi}

    if request.method == 'PUT':
        body = read_json(request)
        data = whitelist(body, {
            'totaldesa': Coerce.to_int,
            'desaterlayani': Coerce.to_int,
        })
        return api_response(update_from_year(CakupanTelekomunikasi, request, body, key, tahun, data))

    cakupan = CakupanTelekomunikasi.objects.filter(**key, tahun=tahun).first()
    if cakupan is None:
        raise NotFound('Data tidak ditemukan')

    if request.method == 'DELETE':
        cakupan.delete()
        return api_response({'message': 'Data berhasil dihapus'})

    return api_response(model_to_dict(cakupan))
