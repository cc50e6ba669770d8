import logging

from django.shortcuts import get_object_or_404

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict, NotFound
from apps.core.http import read_json
from apps.core.models import Aksi
from apps.core.parsing import Coerce, path_id, query_limit, require_str
from apps.core.serialization import api_response, model_to_dict
from apps.core.updates import audit_stamp, whitelist
from apps.regions.services import KecamatanService
from .models import Kematian, PrevalensiStunting

logger = logging.getLogger(__name__)

# body key -> model attribute
KEMATIAN_BANDS = {
    'jumkem0_4Tahun': 'jumkem0_4tahun',
    'jumkem5_9Tahun': 'jumkem5_9tahun',
    'jumkem10_14Tahun': 'jumkem10_14tahun',
    'jumkem15_19Tahun': 'jumkem15_19tahun',
}

STUNTING_NUMBERS = {
    'kdkecamatan': 'kdkecamatan',
    'tahun': 'tahun',
    'jumlahBalita': 'jumlah_balita',
    'balitaStunting': 'balita_stunting',
}


def whole_number(key, value):
    try:
        number = float(str(value).strip())
    except ValueError:
        raise BadRequest(f'Field {key} harus berupa angka')
    if not number.is_integer():
        raise BadRequest(f'Field {key} harus berupa bilangan bulat')
    return int(number)


# Kematian (usia harapan hidup)

@api_view(['GET', 'POST'])
def kematian_collection(request):
    if request.method == 'POST':
        return create_kematian(request)

    pk = Coerce.to_int(request.GET.get('id'))
    if pk:
        kematian = Kematian.objects.filter(id=pk).first()
        if kematian is None:
            raise NotFound('Data tidak ditemukan')
        return api_response(model_to_dict(kematian))

    kematian = Kematian.objects.all()
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if tahun:
        kematian = kematian.filter(tahun=tahun)
    idkecamatan = Coerce.to_int(request.GET.get('idkecamatan'))
    if idkecamatan:
        kematian = kematian.filter(idkecamatan=idkecamatan)

    kematian = kematian.order_by('-tahun', 'id')[:query_limit(request)]
    return api_response([model_to_dict(k) for k in kematian])


def create_kematian(request):
    body = read_json(request)

    tahun = Coerce.to_int(body.get('tahun'))
    if tahun is None or tahun <= 0:
        raise BadRequest('Tahun wajib angka > 0')
    idkecamatan = Coerce.to_int(body.get('idkecamatan'))
    if idkecamatan is None or idkecamatan <= 0:
        raise BadRequest('idkecamatan wajib angka > 0')

    if Kematian.objects.filter(tahun=tahun, idkecamatan=idkecamatan).exists():
        raise Conflict('Data dengan tahun dan idkecamatan yang sama sudah ada')

    nmkecamatan = (
        Coerce.to_str(body.get('nmkecamatan'), max_length=100, field='nmkecamatan')
        or KecamatanService.name_for(idkecamatan)
        or ''
    )
    kematian = Kematian.objects.create(
        tahun=tahun,
        idkecamatan=idkecamatan,
        nmkecamatan=nmkecamatan,
        **{attr: Coerce.to_int(body.get(key)) for key, attr in KEMATIAN_BANDS.items()},
        username=Coerce.to_str(body.get('username')) or 'admin',
        aksi=Coerce.to_str(body.get('aksi')) or Aksi.CREATE,
        verif=bool(Coerce.to_bool(body.get('verif'))),
    )
    logger.info(f"Created kematian {kematian}")
    return api_response(model_to_dict(kematian), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def kematian_detail(request, id):
    kematian = get_object_or_404(Kematian, id=path_id(id))

    if request.method == 'DELETE':
        data = model_to_dict(kematian)
        kematian.delete()
        return api_response({'message': 'Data berhasil dihapus', 'data': data})

    if request.method == 'PUT':
        body = read_json(request)
        parsers = {
            'tahun': Coerce.to_int,
            'idkecamatan': Coerce.to_int,
            'nmkecamatan': lambda v: Coerce.to_str(v, max_length=100, field='nmkecamatan'),
            **{key: Coerce.to_int for key in KEMATIAN_BANDS},
            'verif': Coerce.to_bool,
        }
        data = whitelist(body, parsers)
        for key, value in data.items():
            setattr(kematian, KEMATIAN_BANDS.get(key, key), value)

        duplicate = (
            Kematian.objects.filter(tahun=kematian.tahun, idkecamatan=kematian.idkecamatan)
            .exclude(id=kematian.id)
            .exists()
        )
        if duplicate:
            raise Conflict('Data dengan tahun dan idkecamatan yang sama sudah ada')

        for attr, value in audit_stamp(request, body).items():
            setattr(kematian, attr, value)
        kematian.save()

    return api_response(model_to_dict(kematian))


# Prevalensi stunting

def stunting_duplicate(existing):
    return Conflict(
        'Data dengan kombinasi kecamatan dan tahun sudah ada',
        existingData={
            'id': existing.id,
            'nmkecamatan': existing.nmkecamatan,
            'jumlahBalita': existing.jumlah_balita,
            'balitaStunting': existing.balita_stunting,
            'persentase': existing.persentase,
        },
    )


@api_view(['GET', 'POST'])
def stunting_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        for key in ('kdkecamatan', 'nmkecamatan', 'tahun', 'jumlahBalita', 'balitaStunting'):
            if body.get(key) is None:
                raise BadRequest(f'Field {key} wajib diisi')
        values = {attr: whole_number(key, body[key]) for key, attr in STUNTING_NUMBERS.items()}

        kd, nm = KecamatanService.sync_pair(
            PrevalensiStunting, values['kdkecamatan'], require_str(body, 'nmkecamatan', max_length=100)
        )
        values['kdkecamatan'], values['nmkecamatan'] = kd, nm

        existing = PrevalensiStunting.objects.filter(kdkecamatan=kd, tahun=values['tahun']).first()
        if existing:
            raise stunting_duplicate(existing)

        stunting = PrevalensiStunting.objects.create(**values)
        logger.info(f"Created prevalensi stunting {stunting} ({stunting.persentase}%)")
        return api_response(model_to_dict(stunting), status=201)

    stunting = PrevalensiStunting.objects.all()
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if tahun is not None:
        stunting = stunting.filter(tahun=tahun)
    kecamatan = Coerce.to_str(request.GET.get('kecamatan'))
    if kecamatan:
        stunting = stunting.filter(nmkecamatan__icontains=kecamatan)

    return api_response([model_to_dict(s) for s in stunting])


@api_view(['GET', 'PUT', 'DELETE'])
def stunting_detail(request, id):
    stunting = get_object_or_404(PrevalensiStunting, id=path_id(id))

    if request.method == 'DELETE':
        stunting.delete()
        return api_response({'message': 'Data berhasil dihapus'})

    if request.method == 'PUT':
        body = read_json(request)
        values = {
            attr: whole_number(key, body[key])
            for key, attr in STUNTING_NUMBERS.items()
            if body.get(key) is not None
        }
        if 'nmkecamatan' in body:
            values['nmkecamatan'] = Coerce.to_str(body['nmkecamatan'], max_length=100, field='nmkecamatan')
        if not values:
            raise BadRequest('Tidak ada field untuk diupdate')

        kd, nm = KecamatanService.sync_pair(
            PrevalensiStunting,
            values.get('kdkecamatan', stunting.kdkecamatan),
            values.get('nmkecamatan') or stunting.nmkecamatan,
        )
        values['kdkecamatan'], values['nmkecamatan'] = kd, nm

        for attr, value in values.items():
            setattr(stunting, attr, value)

        existing = (
            PrevalensiStunting.objects.filter(kdkecamatan=stunting.kdkecamatan, tahun=stunting.tahun)
            .exclude(id=stunting.id)
            .first()
        )
        if existing:
            raise stunting_duplicate(existing)
        stunting.save()

    return api_response(model_to_dict(stunting))
