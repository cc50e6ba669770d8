from decimal import Decimal

import pytest

from apps.indicators.models import (
    Akip, KualitasSdm, RealisasiIndikator, RtlhKecamatan, TargetDayaSaing, TargetIndikator,
)
from apps.infrastructure.models import (
    AksesAirMinum, CakupanTelekomunikasi, Irigasi, JalanKondisi, Jembatan,
)


def by_id(rows, kdiku, tahun):
    return next(row for row in rows if row['id'] == kdiku and row['tahun'] == tahun)


@pytest.mark.django_db
class TestInfrastrukturSummary:
    def test_targets_and_achievements_share_a_row(self, api, ruas, ref_irigasi):
        TargetIndikator.objects.create(kdiku='1002', nmiku='Jalan Mantap', tahun=2024, target=Decimal('72'))
        JalanKondisi.objects.create(noruas=12, kdkecamatan='1203110', tahun=2024, kondisibaik=Decimal('8'))
        Irigasi.objects.create(
            kdirigasi=7, kdkecamatan='1203110', tahun=2024, luas=Decimal('200'), konirigasibaik=Decimal('50'),
        )

        rows = api.get('/api/infrastuktur').json()

        jalan = by_id(rows, '1002', 2024)
        assert jalan['indikator'] == 'Jalan Mantap'
        assert jalan['target'] == 72
        assert jalan['capaian'] == 80
        irigasi = by_id(rows, '1004', 2024)
        assert irigasi['indikator'] == 'Irigasi'
        assert irigasi['target'] == 0
        assert irigasi['capaian'] == 25

    def test_only_active_bridges_count(self, api, db):
        for jembatan_id, kondisi, aktif in ((1, 'BAIK', True), (2, 'RUSAK', True), (3, 'RUSAK', False)):
            Jembatan.objects.create(
                kdkecamatan=1, jembatan_id=jembatan_id, nama_jembatan=str(jembatan_id),
                kondisi=kondisi, aktif=aktif, tahun=2024,
            )
        rows = api.get('/api/infrastuktur').json()
        assert by_id(rows, '1003', 2024)['capaian'] == 50

    def test_zero_denominator(self, api, db):
        AksesAirMinum.objects.create(
            kdkecamatan='1', nmkecamatan='Arse', jmlpenduduk=0, jmlairminumlayak=0,
            persentaseairminum=Decimal('0'), tahun=2024,
        )
        CakupanTelekomunikasi.objects.create(kdtelekomunikasi='T', tahun=2024, totaldesa=40, desaterlayani=10)
        rows = api.get('/api/infrastuktur').json()
        assert by_id(rows, '1005', 2024)['capaian'] == 0
        assert by_id(rows, '1007', 2024)['capaian'] == 25

    def test_empty(self, api, db):
        assert api.get('/api/infrastuktur').json() == []


@pytest.mark.django_db
class TestPivots:
    def test_kualitas_sdm(self, api):
        TargetIndikator.objects.create(kdiku='1017', nmiku='IPM', tahun=2024, target=Decimal('70.50'))
        RealisasiIndikator.objects.create(kdiku='1017', tahun=2024, capaian=Decimal('71.25'))

        rows = api.get('/api/kualitassdm').json()

        assert len(rows) == 1
        assert rows[0]['id'] == '24'
        assert rows[0]['tahun'] == 2024
        assert rows[0]['targetipm'] == 70.5
        assert rows[0]['ipm'] == 71.25
        assert rows[0]['harapanlamasekolah'] == 0

    def test_lingkungan_hidup(self, api):
        TargetIndikator.objects.create(kdiku='1024', nmiku='IKLH', tahun=2023, target=Decimal('65'))
        rows = api.get('/api/lingkunganhidup').json()
        assert rows == [{
            'tahun': 2023,
            'target_iklh': 65,
            'iklh': 0,
            'target_penurunan_intensitas': 0,
            'penurunan_intensitas': 0,
        }]

    def test_targets_by_year(self, api):
        TargetIndikator.objects.create(kdiku='1011', nmiku='Kemiskinan', tahun=2024, target=Decimal('8.5'))
        TargetIndikator.objects.create(kdiku='1013', nmiku='Pengangguran', tahun=2024, target=Decimal('4'))
        rows = api.get('/api/kesejahteraanmasyarakat').json()
        assert rows == [{'tahun': '2024', 'nilaimiskin': 8.5, 'nilaiinflasi': None, 'nilainganggur': 4}]

    def test_perkapita_values_are_strings(self, api):
        TargetIndikator.objects.create(kdiku='1009', nmiku='PDRB', tahun=2024, target=Decimal('45.20'))
        rows = api.get('/api/perkapita').json()
        assert rows[0]['pdrb_perkapita'] == '45.20'

    def test_kualitas_sdm_value(self, api):
        row = KualitasSdm.objects.create(kdiku='17', tahun=2024, nilai=Decimal('70.10'))
        assert api.get(f'/api/akip/{row.id_data}').json() == {'tahun': '2024', 'ipm': 70.1}
        assert api.get('/api/capaianrtlh/999').status_code == 404


@pytest.mark.django_db
class TestRtlh:
    def test_percentage_is_computed(self, db):
        row = RtlhKecamatan.objects.create(kdkecamatan=1, nmkecamatan='Arse', tahun=2024, jltotalrt=400, jlrtlh=50)
        assert row.presentasitlh == Decimal('12.50')

    def test_capaian(self, api):
        TargetIndikator.objects.create(kdiku='1026', nmiku='RTLH', tahun=2024, target=Decimal('10'))
        RtlhKecamatan.objects.create(kdkecamatan=1, nmkecamatan='Arse', tahun=2024, jltotalrt=300, jlrtlh=30)
        RtlhKecamatan.objects.create(kdkecamatan=2, nmkecamatan='Sipirok', tahun=2024, jltotalrt=100, jlrtlh=20)

        rows = api.get('/api/capaianrtlh').json()

        assert rows == [{'id': '1026', 'tahun': 2024, 'target': '10.00', 'capaian': '12.50'}]

    def test_listing(self, api):
        RtlhKecamatan.objects.create(kdkecamatan=1, nmkecamatan='Arse', tahun=2024, jltotalrt=400, jlrtlh=50)
        assert api.get('/api/rtlh').json() == [
            {'tahun': 2024, 'kecamatan': 'Arse', 'jumlahkk': 400, 'rtlh': 50, 'persentase': 12.5}
        ]


@pytest.mark.django_db
class TestTargets:
    def test_perkapita_kdiku_is_restricted(self, api):
        response = api.post(
            '/api/tblperkapita',
            {'kdiku': '1017', 'nmiku': 'IPM', 'tahun': 2024, 'target': 1},
            content_type='application/json',
        )
        assert response.status_code == 400

    def test_perkapita_duplicate(self, api):
        body = {'kdiku': '1008', 'nmiku': 'Pertumbuhan Ekonomi', 'tahun': 2024, 'target': '5,1'}
        assert api.post('/api/tblperkapita', body, content_type='application/json').status_code == 201
        response = api.post('/api/tblperkapita', body, content_type='application/json')
        assert response.status_code == 409
        assert response.json()['error'] == 'Data duplikat (nilai unik sudah digunakan)'

    def test_akip_targets(self, api):
        body = {'kdiku': '1021', 'nmiku': 'SAKIP', 'tahun': 2024, 'target': 'abc', 'satuan': 'nilai'}
        response = api.post('/api/akip', body, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'target harus numerik'

        response = api.post('/api/akip', {**body, 'target': 75}, content_type='application/json')
        assert response.status_code == 201
        data = api.get('/api/akip').json()
        assert data['success'] is True
        assert data['data'][0]['kdiku'] == '1021'


@pytest.mark.django_db
class TestAkipScores:
    def test_create_and_search(self, api):
        body = {'kodesasaran': '3', 'indikator': 'Nilai SAKIP', 'tahun': 2024, 'reformasi': 'BB', 'spi': '3,2', 'sakip': '70.5'}
        response = api.post('/api/tblakip', body, content_type='application/json')
        assert response.status_code == 201
        assert response.json()['createdAt']

        assert len(api.get('/api/tblakip', {'search': 'sakip'}).json()) == 1
        assert len(api.get('/api/tblakip', {'search': '70.5'}).json()) == 1
        assert api.get('/api/tblakip', {'search': 'tidak ada'}).json() == []

    def test_duplicate(self, api):
        Akip.objects.create(kodesasaran=3, indikator='X', tahun=2024)
        response = api.post(
            '/api/tblakip', {'kodesasaran': 3, 'indikator': 'Y', 'tahun': 2024}, content_type='application/json'
        )
        assert response.status_code == 409
        assert response.json()['error'] == 'Kode sasaran sudah digunakan'


@pytest.mark.django_db
class TestDayaSaing:
    body = {
        'id': 'DS01',
        'indikator': 'Infrastruktur',
        'kdiku': '2001',
        'nmiku': 'Kualitas Jalan',
        'tahun': 2024,
        'target': 60,
        'capaian': '55.5',
    }

    def test_create_and_list(self, api):
        response = api.post('/api/indexdayasaing', self.body, content_type='application/json')
        assert response.status_code == 201
        assert response.json()['message'] == 'Data berhasil ditambahkan'

        rows = api.get('/api/indexdayasaing').json()
        assert rows == [{
            'id': 'DS01',
            'indikator': 'Infrastruktur',
            'kdiku': '2001',
            'nmiku': 'Kualitas Jalan',
            'tahun': 2024,
            'target': 60,
            'capaian': 55.5,
        }]

    def test_invalid_body(self, api):
        response = api.post('/api/indexdayasaing', {'id': 'DS01'}, content_type='application/json')
        assert response.status_code == 400

    def test_update_by_kdiku_and_year(self, api):
        TargetDayaSaing.objects.create(
            iddys='DS01', nmdys='Infrastruktur', kdiku='2001', nmiku='Kualitas Jalan', tahun=2024,
        )
        response = api.put(
            '/api/indexdayasaing', {'kdiku': '2001', 'tahun': '2024', 'capaian': 58}, content_type='application/json'
        )
        assert response.status_code == 200
        assert TargetDayaSaing.objects.get().capaian == Decimal('58')

    def test_update_needs_a_value(self, api):
        response = api.put('/api/indexdayasaing', {'kdiku': '2001', 'tahun': 2024}, content_type='application/json')
        assert response.status_code == 400

    def test_update_missing_row(self, api):
        response = api.put(
            '/api/indexdayasaing', {'kdiku': '2001', 'tahun': 2024, 'target': 1}, content_type='application/json'
        )
        assert response.status_code == 404
        assert response.json()['error'] == 'Data tidak ditemukan.'

    def test_update_by_id(self, api):
        row = TargetDayaSaing.objects.create(iddys='DS01', nmdys='A', kdiku='2001', nmiku='B', tahun=2024)
        response = api.put(f'/api/indexdayasaing/{row.id}', {'target': '61'}, content_type='application/json')
        assert response.json()['data']['target'] == '61'

    def test_raw_rows_filter(self, api):
        TargetDayaSaing.objects.create(iddys='DS01', nmdys='A', kdiku='2001', nmiku='Jalan', tahun=2023)
        TargetDayaSaing.objects.create(iddys='DS01', nmdys='A', kdiku='2001', nmiku='Jalan', tahun=2024)
        rows = api.get('/api/tbltargetdayasaing', {'tahun': 2024, 'search': 'jal'}).json()
        assert [row['tahun'] for row in rows] == [2024]
