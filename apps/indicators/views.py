import logging

from django.db.models import Q

from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict, NotFound
from apps.core.http import read_json
from apps.core.parsing import DECIMAL_PATTERN, Coerce, path_id, query_limit
from apps.core.serialization import api_response, model_to_dict
from .models import Akip, RtlhKecamatan, TargetDayaSaing, TargetIndikator
from .queries import CapaianRtlh, IndexDayaSaing, InfrastrukturSummary
from .services import AKIP, KESEHATAN, KESEJAHTERAAN, PERKAPITA, IndicatorService

logger = logging.getLogger(__name__)

TARGET_FIELDS = ('kdiku', 'nmiku', 'tahun', 'target', 'satuan')


def numeric(value, field):
    """Decimal from a body value that must be numeric"""
    if Coerce.is_blank(value) or isinstance(value, bool):
        raise BadRequest(f'{field} harus numerik')
    try:
        return Coerce.to_decimal(value)
    except BadRequest:
        raise BadRequest(f'{field} harus numerik')


def create_target(body, allowed=None):
    """Insert one tbltargetindikator row from a request body"""
    kdiku = Coerce.to_str(body.get('kdiku'), max_length=10, field='kdiku')
    nmiku = Coerce.to_str(body.get('nmiku'), max_length=255, field='nmiku')
    if not kdiku or not nmiku:
        raise BadRequest('kdiku dan nmiku wajib diisi')
    if allowed is not None and kdiku not in allowed:
        raise BadRequest(f"kdiku harus salah satu dari: {', '.join(allowed)}")
    tahun = Coerce.to_year(body.get('tahun'))
    if tahun is None:
        raise BadRequest('tahun harus berupa angka')

    if TargetIndikator.objects.filter(kdiku=kdiku, tahun=tahun).exists():
        raise Conflict('Data duplikat (nilai unik sudah digunakan)')

    target = TargetIndikator.objects.create(
        kdiku=kdiku,
        nmiku=nmiku,
        tahun=tahun,
        target=numeric(body.get('target'), 'target'),
        satuan=Coerce.to_str(body.get('satuan'), max_length=50, field='satuan'),
    )
    logger.info(f"Created target indikator {target}")
    return target


# Composite summaries

@api_view(['GET'])
def infrastruktur_summary(request):
    return api_response(InfrastrukturSummary.rows())


@api_view(['GET'])
def kualitas_sdm(request):
    return api_response(IndicatorService.kualitas_sdm())


@api_view(['GET'])
def lingkungan_hidup(request):
    return api_response(IndicatorService.lingkungan_hidup())


@api_view(['GET'])
def capaian_rtlh(request):
    return api_response(CapaianRtlh.rows())


@api_view(['GET'])
def rtlh(request):
    rows = RtlhKecamatan.objects.order_by('kdkecamatan', 'tahun')
    return api_response([
        {
            'tahun': r.tahun,
            'kecamatan': r.nmkecamatan,
            'jumlahkk': r.jltotalrt,
            'rtlh': r.jlrtlh,
            'persentase': Coerce.to_number(r.presentasitlh),
        }
        for r in rows
    ])


@api_view(['GET'])
def kesehatan_masyarakat(request):
    return api_response(IndicatorService.targets_by_year(KESEHATAN))


@api_view(['GET'])
def kesejahteraan_masyarakat(request):
    return api_response(IndicatorService.targets_by_year(KESEJAHTERAAN))


@api_view(['GET'])
def perkapita(request):
    return api_response(IndicatorService.targets_by_year(PERKAPITA, as_string=True))


@api_view(['GET'])
def kualitas_sdm_detail(request, id):
    """Shared by akip/<id>, capaianrtlh/<id> and lingkunganhidup/<id>"""
    return api_response(IndicatorService.kualitas_sdm_value(path_id(id)))


# Target rows

@api_view(['GET', 'POST'])
def perkapita_targets(request):
    if request.method == 'POST':
        target = create_target(read_json(request), allowed=tuple(PERKAPITA))
        return api_response(model_to_dict(target), status=201)

    targets = TargetIndikator.objects.filter(kdiku__in=PERKAPITA).order_by('tahun', 'kdiku')
    return api_response([model_to_dict(t) for t in targets])


@api_view(['GET', 'POST'])
def akip_targets(request):
    if request.method == 'POST':
        body = read_json(request)
        missing = [field for field in TARGET_FIELDS if Coerce.is_blank(body.get(field))]
        if missing:
            raise BadRequest('Semua field wajib diisi dengan tipe yang benar')
        target = create_target(body)
        return api_response(model_to_dict(target), status=201)

    targets = TargetIndikator.objects.filter(kdiku__in=AKIP).order_by('tahun', 'kdiku')
    return api_response({
        'success': True,
        'data': list(targets.values(*TARGET_FIELDS)),
    })


# AKIP scores

@api_view(['GET', 'POST'])
def akip_scores(request):
    if request.method == 'POST':
        body = read_json(request)
        indikator = Coerce.to_str(body.get('indikator'), max_length=255, field='indikator')
        if Coerce.is_blank(body.get('kodesasaran')) or not indikator:
            raise BadRequest('Harus mengisi kode sasaran dan indikator')
        kodesasaran = Coerce.to_int(body['kodesasaran'])
        if kodesasaran is None:
            raise BadRequest('kode sasaran harus berupa angka')
        tahun = Coerce.to_year(body.get('tahun'))
        if tahun is None:
            raise BadRequest('tahun harus 4 digit')

        if Akip.objects.filter(kodesasaran=kodesasaran, tahun=tahun).exists():
            raise Conflict('Kode sasaran sudah digunakan')

        akip = Akip.objects.create(
            kodesasaran=kodesasaran,
            indikator=indikator,
            tahun=tahun,
            reformasi=Coerce.to_str(body.get('reformasi'), max_length=10, field='reformasi'),
            spi=Coerce.to_decimal(body.get('spi')),
            sakip=Coerce.to_decimal(body.get('sakip')),
        )
        return api_response(model_to_dict(akip), status=201)

    akip = Akip.objects.all()
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        query = Q(indikator__icontains=search) | Q(reformasi__icontains=search)
        number = Coerce.to_int(search)
        if number is not None:
            query |= Q(kodesasaran=number) | Q(tahun=number)
        if DECIMAL_PATTERN.match(search.replace(',', '.', 1)):
            decimal = Coerce.to_decimal(search)
            query |= Q(spi=decimal) | Q(sakip=decimal)
        akip = akip.filter(query)

    return api_response([model_to_dict(a) for a in akip.order_by('kodesasaran', 'tahun')])


# Competitiveness index

def dayasaing_changes(body):
    changes = {}
    for field in ('target', 'capaian'):
        if body.get(field) is not None:
            changes[field] = numeric(body[field], field)
    if not changes:
        raise BadRequest("Tidak ada field yang diperbarui. Sertakan 'target' atau 'capaian'.")
    return changes


def update_dayasaing(row, changes):
    for field, value in changes.items():
        setattr(row, field, value)
    row.save(update_fields=list(changes))
    logger.info(f"Updated index daya saing {row}: {', '.join(changes)}")
    return api_response({'message': 'Data berhasil diperbarui', 'data': model_to_dict(row)})


@api_view(['GET', 'POST', 'PUT'])
def index_daya_saing(request):
    if request.method == 'POST':
        body = read_json(request)
        text_fields = ('indikator', 'kdiku', 'nmiku')
        if any(not isinstance(body.get(field), str) for field in text_fields) or any(
            body.get(field) is None for field in ('id', 'tahun', 'target', 'capaian')
        ):
            raise BadRequest('Body tidak valid. Wajib { id, indikator, kdiku, nmiku, tahun, target, capaian }')
        tahun = Coerce.to_int(body['tahun'])
        if tahun is None:
            raise BadRequest('tahun/target/capaian harus numerik.')
        values = {
            'iddys': Coerce.to_str(body['id'], max_length=20, field='id'),
            'nmdys': Coerce.to_str(body['indikator'], max_length=255, field='indikator'),
            'kdiku': Coerce.to_str(body['kdiku'], max_length=10, field='kdiku'),
            'nmiku': Coerce.to_str(body['nmiku'], max_length=255, field='nmiku'),
            'tahun': tahun,
            'target': numeric(body['target'], 'target'),
            'capaian': numeric(body['capaian'], 'capaian'),
        }
        if TargetDayaSaing.objects.filter(kdiku=values['kdiku'], tahun=tahun).exists():
            raise Conflict(f"Data untuk kdiku={values['kdiku']} dan tahun={tahun} sudah ada")

        row = TargetDayaSaing.objects.create(**values)
        return api_response({'message': 'Data berhasil ditambahkan', 'data': model_to_dict(row)}, status=201)

    if request.method == 'PUT':
        body = read_json(request)
        kdiku = body.get('kdiku')
        if not isinstance(kdiku, str) or body.get('tahun') is None:
            raise BadRequest('Body tidak valid. Minimal { kdiku, tahun }')
        tahun = Coerce.to_int(body['tahun'])
        if tahun is None:
            raise BadRequest('tahun harus numerik.')
        changes = dayasaing_changes(body)

        row = TargetDayaSaing.objects.filter(kdiku=kdiku.strip(), tahun=tahun).first()
        if row is None:
            raise NotFound('Data tidak ditemukan.')
        return update_dayasaing(row, changes)

    return api_response(IndexDayaSaing.rows())


@api_view(['PUT'])
def index_daya_saing_detail(request, id):
    row = TargetDayaSaing.objects.filter(id=path_id(id)).first()
    if row is None:
        raise NotFound('Data tidak ditemukan.')
    return update_dayasaing(row, dayasaing_changes(read_json(request)))


@api_view(['GET', 'POST'])
def target_daya_saing(request):
    if request.method == 'POST':
        body = read_json(request)
        for field in ('iddys', 'nmdys', 'kdiku', 'nmiku'):
            if not Coerce.to_str(body.get(field)):
                raise BadRequest(f'{field} wajib diisi')
        tahun = Coerce.to_year(body.get('tahun'))
        if tahun is None:
            raise BadRequest('tahun harus 4 digit')
        kdiku = Coerce.to_str(body['kdiku'], max_length=10, field='kdiku')
        if TargetDayaSaing.objects.filter(kdiku=kdiku, tahun=tahun).exists():
            raise Conflict(f'Data untuk kdiku={kdiku} dan tahun={tahun} sudah ada')

        row = TargetDayaSaing.objects.create(
            iddys=Coerce.to_str(body['iddys'], max_length=20, field='iddys'),
            nmdys=Coerce.to_str(body['nmdys'], max_length=255, field='nmdys'),
            kdiku=kdiku,
            nmiku=Coerce.to_str(body['nmiku'], max_length=255, field='nmiku'),
            tahun=tahun,
            target=Coerce.to_decimal(body.get('target')),
            capaian=Coerce.to_decimal(body.get('capaian')),
        )
        return api_response(model_to_dict(row), status=201)

    rows = TargetDayaSaing.objects.all()
    tahun = Coerce.to_int(request.GET.get('tahun'))
    if tahun:
        rows = rows.filter(tahun=tahun)
    search = Coerce.to_str(request.GET.get('search'))
    if search:
        rows = rows.filter(
            Q(nmdys__icontains=search) | Q(nmiku__icontains=search) | Q(kdiku__icontains=search)
        )
    rows = rows.order_by('iddys', 'kdiku', 'tahun')[:query_limit(request)]
    return api_response([model_to_dict(r) for r in rows])
