from django.core.management.base import BaseCommand
from django.db.models import Count, Max, Min

from apps.indicators.models import RealisasiIndikator, TargetIndikator
from apps.infrastructure.models import (
    AksesAirMinum, CakupanTelekomunikasi, DayaListrik, Irigasi, Jembatan, JalanKondisi,
    RefIrigasi, RuasJalan,
)
from apps.regions.models import Kecamatan

COUNTED = [
    ('Kecamatan', Kecamatan),
    ('Ruas jalan', RuasJalan),
    ('Kondisi jalan', JalanKondisi),
    ('Kondisi jembatan', Jembatan),
    ('Referensi irigasi', RefIrigasi),
    ('Kondisi irigasi', Irigasi),
    ('Akses air minum', AksesAirMinum),
    ('Ketersediaan listrik', DayaListrik),
    ('Cakupan telekomunikasi', CakupanTelekomunikasi),
    ('Target indikator', TargetIndikator),
    ('Realisasi indikator', RealisasiIndikator),
]


class Command(BaseCommand):
    help = 'Check data health and year coverage'

    def handle(self, *args, **options):
        self.stdout.write(self.style.SUCCESS('\n=== Tapsel Data Health Check ===\n'))

        for label, model in COUNTED:
            self.stdout.write(f"{label}: {model.objects.count()}")

        # Year coverage per IKU
        self.stdout.write(self.style.WARNING('\n=== Target Coverage by IKU ==='))
        coverage = (
            TargetIndikator.objects.values('kdiku')
            .annotate(years=Count('tahun'), first=Min('tahun'), last=Max('tahun'))
            .order_by('kdiku')
        )
        for row in coverage:
            self.stdout.write(f"  {row['kdiku']}: {row['years']} tahun ({row['first']}-{row['last']})")

        missing = (
            TargetIndikator.objects.exclude(
                kdiku__in=RealisasiIndikator.objects.values('kdiku')
            ).order_by('kdiku').values_list('kdiku', flat=True).distinct()
        )
        if missing:
            self.stdout.write(self.style.WARNING(f"\nIKU without realisasi: {', '.join(sorted(missing))}"))

        # Condition rows whose reference row is gone
        orphaned_roads = JalanKondisi.objects.exclude(
            noruas__in=RuasJalan.objects.values('noruas')
        ).count()
        orphaned_irrigation = Irigasi.objects.exclude(
            kdirigasi__in=RefIrigasi.objects.values('kdirigasi')
        ).count()

        if orphaned_roads:
            self.stdout.write(self.style.ERROR(f'\nWARNING: {orphaned_roads} kondisi jalan rows without ruas jalan'))
        if orphaned_irrigation:
            self.stdout.write(self.style.ERROR(f'\nWARNING: {orphaned_irrigation} kondisi irigasi rows without referensi irigasi'))

        self.stdout.write(self.style.SUCCESS('\nHealth check complete!'))
