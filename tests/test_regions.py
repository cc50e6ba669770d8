import pytest

from apps.regions.models import Desa, Kecamatan, Opd, Penduduk
from apps.regions.services import KecamatanService


@pytest.mark.django_db
class TestKecamatan:
    def test_create_and_search(self, api):
        response = api.post(
            '/api/ref-kecamatan',
            {'kddesa': 1203110001, 'kdkecamatan': 1203110, 'nmkecamatan': 'Sipirok'},
            content_type='application/json',
        )
        assert response.status_code == 201
        assert response.json()['nmkecamatan'] == 'Sipirok'

        rows = api.get('/api/ref-kecamatan', {'search': 'sipi'}).json()
        assert [row['kdkecamatan'] for row in rows] == [1203110]

    def test_create_requires_all_fields(self, api):
        response = api.post('/api/ref-kecamatan', {'kdkecamatan': 1}, content_type='application/json')
        assert response.status_code == 400
        assert 'wajib diisi' in response.json()['error']

    def test_partial_update(self, api, kecamatan):
        response = api.put(
            f'/api/ref-kecamatan/{kecamatan.id}',
            {'nmkecamatan': 'Sipirok Dolok'},
            content_type='application/json',
        )
        assert response.status_code == 200
        kecamatan.refresh_from_db()
        assert kecamatan.nmkecamatan == 'Sipirok Dolok'

    def test_update_with_empty_body(self, api, kecamatan):
        response = api.put(f'/api/ref-kecamatan/{kecamatan.id}', {}, content_type='application/json')
        assert response.status_code == 400

    def test_unknown_id(self, api):
        assert api.get('/api/ref-kecamatan/999').status_code == 404

    def test_invalid_id(self, api):
        assert api.get('/api/ref-kecamatan/abc').status_code == 400

    def test_delete(self, api, kecamatan):
        assert api.delete(f'/api/ref-kecamatan/{kecamatan.id}').json() == {'ok': True}
        assert not Kecamatan.objects.exists()


@pytest.mark.django_db
class TestDesaAndOpd:
    def test_duplicate_desa(self, api):
        Desa.objects.create(kddesa=1203110001, nmdesa='Bagas Lombang')
        response = api.post(
            '/api/ref-desa', {'kddesa': '1203110001', 'nmdesa': 'Lain'}, content_type='application/json'
        )
        assert response.status_code == 409

    def test_desa_code_must_be_positive(self, api):
        response = api.post('/api/ref-desa', {'kddesa': -3, 'nmdesa': 'X'}, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'kddesa harus angka positif'

    def test_opd_list_and_duplicate(self, api):
        Opd.objects.create(kdopd=101, nmopd='Dinas Kesehatan')
        assert api.get('/api/ref-opd', {'search': '101'}).json() == [{'kdopd': 101, 'nmopd': 'Dinas Kesehatan'}]

        response = api.post('/api/ref-opd', {'kdopd': '101', 'nmopd': 'X'}, content_type='application/json')
        assert response.status_code == 409


@pytest.mark.django_db
class TestPenduduk:
    body = {
        'tahun': 2024,
        'kdkecamatan': 1203110,
        'nmkecamatan': 'Sipirok',
        'lakiLaki': 15000,
        'perempuan': 15500,
        'jumlahkk': 7000,
        'pop04tahun': 2500,
        'pop59tahun': 2600,
        'pop1014tahun': 2700,
        'pop1519tahun': 2800,
    }

    def test_total_is_computed(self, api):
        response = api.post('/api/ref-penduduk', self.body, content_type='application/json')
        assert response.status_code == 201
        data = response.json()
        assert data['total'] == 30500
        assert data['lakiLaki'] == 15000

    def test_duplicate_reports_existing_row(self, api):
        api.post('/api/ref-penduduk', self.body, content_type='application/json')
        response = api.post('/api/ref-penduduk', self.body, content_type='application/json')
        assert response.status_code == 409
        assert response.json()['existingData']['total'] == 30500

    def test_fraction_is_rejected(self, api):
        response = api.post('/api/ref-penduduk', {**self.body, 'jumlahkk': '7.5'}, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'Field jumlahkk harus berupa bilangan bulat'

    def test_blank_name_is_rejected(self, api):
        response = api.post('/api/ref-penduduk', {**self.body, 'nmkecamatan': ''}, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'nmkecamatan wajib diisi (maks 100 karakter)'
        assert not Penduduk.objects.exists()

    def test_delete_returns_deleted_row(self, api):
        penduduk = Penduduk.objects.create(tahun=2023, kdkecamatan=1203110, nmkecamatan='Sipirok')
        data = api.delete(f'/api/ref-penduduk/{penduduk.id}').json()
        assert data['data']['id'] == penduduk.id


@pytest.mark.django_db
class TestKecamatanService:
    def test_name_for(self, kecamatan):
        assert KecamatanService.name_for('1203110') == 'Sipirok'
        assert KecamatanService.name_for('x') is None

    def test_sync_pair_prefers_known_name(self):
        Penduduk.objects.create(tahun=2023, kdkecamatan=1203110, nmkecamatan='Sipirok')
        assert KecamatanService.sync_pair(Penduduk, 999, 'Sipirok') == (1203110, 'Sipirok')
