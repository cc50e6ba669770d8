from decimal import Decimal

import pytest

from apps.finance.models import Anggaran, Realisasi, Rekening3, Skpd
from apps.finance.routers import SitaridaRouter
from apps.regions.models import Opd

pytestmark = pytest.mark.django_db(databases=['default', 'sitarida'])


@pytest.fixture
def belanja_rows():
    Skpd.objects.create(kd_skpd='1.02.0.00.0.00.01.0000', nm_skpd='Dinas Kesehatan')
    Rekening3.objects.create(kd_rek3='5.1.02', nm_rek3='Belanja Barang dan Jasa')
    Anggaran.objects.create(
        kd_skpd='1.02.0.00.0.00.01.0000', kd_sub_kegiatan='1.02.02.2.01.01',
        kd_rek6='5.1.02.01.01.0001', nilai_ubah=Decimal('1000000'),
    )
    Anggaran.objects.create(
        kd_skpd='1.02.0.00.0.00.01.0000', kd_sub_kegiatan='1.02.02.2.01.01',
        kd_rek6='4.1.01.01.01.0001', nilai_ubah=Decimal('999'),
    )
    Realisasi.objects.create(
        kd_skpd='1.02.0.00.0.00.01.0000', kd_sub_kegiatan='1.02.02.2.01.01',
        kd_rek6='5.1.02.01.01.0001', debet=Decimal('300000'), kredit=Decimal('50000'),
    )


class TestBelanja:
    def test_budget_against_realisation(self, api, belanja_rows):
        rows = api.get('/api/bpkpad/belanja').json()
        assert rows == [{
            'kd_skpd': '1.02.0.00.0.00.01.0000',
            'nm_skpd': 'Dinas Kesehatan',
            'rek': '5.1.02',
            'nmrek': 'Belanja Barang dan Jasa',
            'pagu': 1000000,
            'capaian': 250000,
            'persen': 25,
            'tahun': '2025',
        }]

    def test_filters(self, api, belanja_rows):
        assert api.get('/api/bpkpad/belanja', {'kd_skpd': 'other'}).json() == []
        rows = api.get('/api/bpkpad/belanja', {'rek': '5.1.02', 'tahun': '2024'}).json()
        assert [row['tahun'] for row in rows] == ['2024']

    def test_no_budget_gives_null_percentage(self, api):
        Realisasi.objects.create(kd_skpd='X', kd_sub_kegiatan='1', kd_rek6='5.2.01.01', debet=Decimal('10'))
        rows = api.get('/api/bpkpad/belanja').json()
        assert rows[0]['persen'] is None
        assert rows[0]['nm_skpd'] is None

    def test_invalid_year(self, api):
        assert api.get('/api/bpkpad/belanja', {'tahun': 'abc'}).status_code == 400


class TestRouter:
    def test_finance_models_use_sitarida(self):
        router = SitaridaRouter()
        assert router.db_for_read(Skpd) == 'sitarida'
        assert router.db_for_write(Anggaran) == 'sitarida'
        assert router.db_for_read(Opd) is None

    def test_migrations_stay_apart(self):
        router = SitaridaRouter()
        assert router.allow_migrate('sitarida', 'finance')
        assert not router.allow_migrate('default', 'finance')
        assert not router.allow_migrate('sitarida', 'regions')
        assert router.allow_migrate('default', 'regions')

    def test_no_cross_database_relations(self):
        router = SitaridaRouter()
        assert router.allow_relation(Skpd(), Rekening3()) is True
        assert router.allow_relation(Skpd(), Opd()) is False
        assert router.allow_relation(Opd(), Opd()) is None
