from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from apps.indicators.models import RealisasiIndikator, TargetIndikator
from apps.infrastructure.models import Irigasi, JalanKondisi, RuasJalan
from apps.regions.models import Kecamatan


@pytest.mark.django_db
class TestLoadSampleData:
    def test_loads_once(self):
        out = StringIO()
        call_command('load_sample_data', '--seed', '7', stdout=out)

        assert 'Successfully loaded sample data' in out.getvalue()
        kecamatan = Kecamatan.objects.count()
        assert kecamatan == RuasJalan.objects.count()
        assert JalanKondisi.objects.count() == kecamatan * 3
        assert Irigasi.objects.count() == kecamatan * 3
        assert TargetIndikator.objects.filter(kdiku='1017').count() == 3

        call_command('load_sample_data', stdout=StringIO())
        assert Kecamatan.objects.count() == kecamatan
        assert JalanKondisi.objects.count() == kecamatan * 3


@pytest.mark.django_db
class TestCheckDataHealth:
    def test_reports_orphans(self):
        JalanKondisi.objects.create(noruas=404, kdkecamatan='1', tahun=2024)
        out = StringIO()
        call_command('check_data_health', stdout=out)
        assert '1 kondisi jalan rows without ruas jalan' in out.getvalue()
        assert 'Health check complete!' in out.getvalue()

    def test_reports_missing_realisasi(self):
        TargetIndikator.objects.create(kdiku='1024', nmiku='IKLH', tahun=2024)
        out = StringIO()
        call_command('check_data_health', stdout=out)
        assert 'IKU without realisasi: 1024' in out.getvalue()
        assert '1024: 1 tahun (2024-2024)' in out.getvalue()


@pytest.mark.django_db
class TestImportTargets:
    def write(self, tmp_path, text):
        path = tmp_path / 'targets.csv'
        path.write_text(text, encoding='utf-8')
        return str(path)

    def test_imports_targets_and_realisations(self, tmp_path):
        path = self.write(tmp_path, (
            'kdiku,nmiku,tahun,target,satuan,capaian\n'
            '1017,Indeks Pembangunan Manusia,2024,70.5,poin,71.2\n'
            '1016,Rata-rata Lama Sekolah,abc,8.9,tahun,\n'
        ))
        out = StringIO()
        call_command('import_targets', path, stdout=out)

        target = TargetIndikator.objects.get(kdiku='1017', tahun=2024)
        assert str(target.target) == '70.50'
        assert RealisasiIndikator.objects.get(kdiku='1017', tahun=2024).capaian is not None
        assert not TargetIndikator.objects.filter(kdiku='1016').exists()

    def test_non_numeric_target_skips_row(self, tmp_path):
        path = self.write(tmp_path, (
            'kdiku,nmiku,tahun,target,satuan,capaian\n'
            '1017,Indeks Pembangunan Manusia,2024,abc,poin,\n'
            '1016,Rata-rata Lama Sekolah,2024,8.9,tahun,x\n'
        ))
        out = StringIO()
        call_command('import_targets', path, stdout=out)

        assert not TargetIndikator.objects.filter(kdiku='1017').exists()
        assert not TargetIndikator.objects.filter(kdiku='1016').exists()
        assert not RealisasiIndikator.objects.filter(kdiku='1016').exists()
        assert 'Line 2 skipped: Nilai desimal tidak valid' in out.getvalue()
        assert '2 failed rows' in out.getvalue()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError):
            call_command('import_targets', str(tmp_path / 'missing.csv'))
