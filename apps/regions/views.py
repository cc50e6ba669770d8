import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict
from apps.core.http import read_json
from apps.core.parsing import Coerce, path_id, require_int, require_str
from apps.core.serialization import api_response, model_to_dict
from .models import Desa, Kecamatan, Opd, Penduduk
from .services import KecamatanService

logger = logging.getLogger(__name__)


# Kecamatan

@api_view(['GET', 'POST'])
def kecamatan_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        if not all(body.get(field) for field in ('kddesa', 'kdkecamatan', 'nmkecamatan')):
            raise BadRequest('kddesa, kdkecamatan, dan nmkecamatan wajib diisi')

        kecamatan = Kecamatan.objects.create(
            kddesa=require_int(body, 'kddesa'),
            kdkecamatan=require_int(body, 'kdkecamatan'),
            nmkecamatan=require_str(body, 'nmkecamatan', max_length=100),
        )
        logger.info(f"Created kecamatan {kecamatan}")
        return api_response(model_to_dict(kecamatan), status=201)

    kecamatan = Kecamatan.objects.all()
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        query = Q(nmkecamatan__icontains=search)
        code = Coerce.to_int(search)
        if code is not None:
            query |= Q(kdkecamatan=code) | Q(kddesa=code)
        kecamatan = kecamatan.filter(query)

    return api_response([model_to_dict(k) for k in kecamatan.order_by('-kdkecamatan')])


@api_view(['GET', 'PUT', 'DELETE'])
def kecamatan_detail(request, id):
    kecamatan = get_object_or_404(Kecamatan, id=path_id(id))

    if request.method == 'DELETE':
        kecamatan.delete()
        return api_response({'ok': True})

    if request.method == 'PUT':
        body = read_json(request)
        changed = []
        for field in ('kddesa', 'kdkecamatan'):
            if field in body:
                setattr(kecamatan, field, require_int(body, field))
                changed.append(field)
        if 'nmkecamatan' in body:
            name = Coerce.to_str(body['nmkecamatan'], max_length=100, field='nmkecamatan')
            if not isinstance(body['nmkecamatan'], str) or not name:
                raise BadRequest('nmkecamatan harus string non-kosong')
            kecamatan.nmkecamatan = name
            changed.append('nmkecamatan')
        if not changed:
            raise BadRequest('Tidak ada field untuk diupdate')
        kecamatan.save(update_fields=changed)

    return api_response(model_to_dict(kecamatan))


# Desa

@api_view(['GET', 'POST'])
def desa_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        name = Coerce.to_str(body.get('nmdesa')) if isinstance(body.get('nmdesa'), str) else None
        if body.get('kddesa') in (None, '') or not name:
            raise BadRequest('Body tidak valid. Wajib { kddesa, nmdesa }')
        code = require_int(body, 'kddesa', minimum=1, message='kddesa harus angka positif')

        if Desa.objects.filter(kddesa=code).exists():
            raise Conflict('Data duplikat (nilai unik sudah digunakan)')
        desa = Desa.objects.create(kddesa=code, nmdesa=name[:100])
        return api_response(model_to_dict(desa), status=201)

    desa = Desa.objects.all()
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        query = Q(nmdesa__icontains=search)
        code = Coerce.to_int(search)
        if code is not None:
            query |= Q(kddesa=code)
        desa = desa.filter(query)

    return api_response([model_to_dict(d) for d in desa.order_by('-kddesa')])


@api_view(['GET', 'PUT', 'DELETE'])
def desa_detail(request, id):
    desa = get_object_or_404(Desa, id=path_id(id))

    if request.method == 'DELETE':
        desa.delete()
        return api_response({'ok': True, 'message': f'Desa {desa.nmdesa} berhasil dihapus'})

    if request.method == 'PUT':
        body = read_json(request)
        changed = []
        if 'kddesa' in body:
            code = require_int(body, 'kddesa', minimum=1, message='kddesa harus angka positif')
            if Desa.objects.filter(kddesa=code).exclude(id=desa.id).exists():
                raise Conflict('Data duplikat (nilai unik sudah digunakan)')
            desa.kddesa = code
            changed.append('kddesa')
        if 'nmdesa' in body:
            desa.nmdesa = require_str(body, 'nmdesa', max_length=100)
            changed.append('nmdesa')
        if not changed:
            raise BadRequest('Tidak ada field untuk diupdate')
        desa.save(update_fields=changed)

    return api_response(model_to_dict(desa))


# OPD

@api_view(['GET', 'POST'])
def opd_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        if not body.get('kdopd') or not body.get('nmopd'):
            raise BadRequest('kdopd dan nmopd wajib diisi')
        code = require_int(body, 'kdopd', message='kdopd harus berupa angka')

        if Opd.objects.filter(kdopd=code).exists():
            raise Conflict(f'OPD dengan kode {code} sudah ada')
        opd = Opd.objects.create(kdopd=code, nmopd=require_str(body, 'nmopd', max_length=255))
        return api_response(model_to_dict(opd), status=201)

    opd = Opd.objects.all()
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        query = Q(nmopd__icontains=search)
        if search.isdigit():
            query |= Q(kdopd=int(search))
        opd = opd.filter(query)

    return api_response(list(opd.order_by('kdopd').values('kdopd', 'nmopd')))


@api_view(['GET', 'PUT', 'DELETE'])
def opd_detail(request, id):
    opd = get_object_or_404(Opd, id=path_id(id))

    if request.method == 'DELETE':
        opd.delete()
        return api_response({'ok': True})

    if request.method == 'PUT':
        body = read_json(request)
        changed = []
        if 'kdopd' in body:
            code = require_int(body, 'kdopd', message='kdopd harus berupa angka')
            if Opd.objects.filter(kdopd=code).exclude(id=opd.id).exists():
                raise Conflict(f'OPD dengan kode {code} sudah ada')
            opd.kdopd = code
            changed.append('kdopd')
        if 'nmopd' in body:
            opd.nmopd = require_str(body, 'nmopd', max_length=255)
            changed.append('nmopd')
        if not changed:
            raise BadRequest('Tidak ada field untuk diupdate')
        opd.save(update_fields=changed)

    return api_response(model_to_dict(opd))


# Penduduk

PENDUDUK_FIELDS = {
    'tahun': 'tahun',
    'kdkecamatan': 'kdkecamatan',
    'lakiLaki': 'laki_laki',
    'perempuan': 'perempuan',
    'jumlahkk': 'jumlahkk',
    'pop04tahun': 'pop04tahun',
    'pop59tahun': 'pop59tahun',
    'pop1014tahun': 'pop1014tahun',
    'pop1519tahun': 'pop1519tahun',
}


def parse_penduduk_numbers(body, required):
    values = {}
    for key, attr in PENDUDUK_FIELDS.items():
        if key not in body or body[key] is None:
            if required:
                raise BadRequest(f'Field {key} wajib diisi')
            continue
        try:
            number = float(str(body[key]).strip())
        except ValueError:
            raise BadRequest(f'Field {key} harus berupa angka')
        if not number.is_integer():
            raise BadRequest(f'Field {key} harus berupa bilangan bulat')
        values[attr] = int(number)
    return values


def penduduk_duplicate(existing):
    return Conflict(
        'Data dengan kombinasi tahun dan kecamatan sudah ada',
        existingData={
            'id': existing.id,
            'nmkecamatan': existing.nmkecamatan,
            'total': existing.total,
        },
    )


@api_view(['GET', 'POST'])
def penduduk_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        if body.get('nmkecamatan') is None:
            raise BadRequest('Field nmkecamatan wajib diisi')
        values = parse_penduduk_numbers(body, required=True)

        kd, nm = KecamatanService.sync_pair(
            Penduduk, values['kdkecamatan'], require_str(body, 'nmkecamatan', max_length=100)
        )
        values['kdkecamatan'], values['nmkecamatan'] = kd, nm

        existing = Penduduk.objects.filter(kdkecamatan=kd, tahun=values['tahun']).first()
        if existing:
            raise penduduk_duplicate(existing)

        penduduk = Penduduk.objects.create(**values)
        logger.info(f"Created penduduk {penduduk}")
        return api_response(model_to_dict(penduduk), status=201)

    penduduk = Penduduk.objects.all()
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if tahun is not None:
        penduduk = penduduk.filter(tahun=tahun)
    kecamatan = Coerce.to_str(request.GET.get('kecamatan'))
    if kecamatan:
        penduduk = penduduk.filter(nmkecamatan__icontains=kecamatan)

    return api_response([model_to_dict(p) for p in penduduk])


@api_view(['GET', 'PUT', 'DELETE'])
def penduduk_detail(request, id):
    penduduk = get_object_or_404(Penduduk, id=path_id(id))

    if request.method == 'DELETE':
        data = model_to_dict(penduduk)
        penduduk.delete()
        return api_response({'message': 'Data penduduk berhasil dihapus', 'data': data})

    if request.method == 'PUT':
        body = read_json(request)
        values = parse_penduduk_numbers(body, required=False)
        if 'nmkecamatan' in body:
            values['nmkecamatan'] = require_str(body, 'nmkecamatan', max_length=100)
        if not values:
            raise BadRequest('Tidak ada field untuk diupdate')

        if 'kdkecamatan' in values or 'nmkecamatan' in values:
            kd, nm = KecamatanService.sync_pair(
                Penduduk,
                values.get('kdkecamatan', penduduk.kdkecamatan),
                values.get('nmkecamatan', penduduk.nmkecamatan),
            )
            values['kdkecamatan'], values['nmkecamatan'] = kd, nm

        for attr, value in values.items():
            setattr(penduduk, attr, value)

        existing = (
            Penduduk.objects.filter(kdkecamatan=penduduk.kdkecamatan, tahun=penduduk.tahun)
            .exclude(id=penduduk.id)
            .first()
        )
        if existing:
            raise penduduk_duplicate(existing)
        penduduk.save()

    return api_response(model_to_dict(penduduk))
