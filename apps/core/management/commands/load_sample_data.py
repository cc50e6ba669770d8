import random
from decimal import Decimal

from django.core.management.base import BaseCommand

from apps.indicators.models import RealisasiIndikator, TargetIndikator
from apps.infrastructure.models import Irigasi, JalanKondisi, RefIrigasi, RuasJalan
from apps.regions.models import Kecamatan

KECAMATAN = [
    (1203010, 'Batang Angkola'),
    (1203011, 'Sayur Matinggi'),
    (1203012, 'Tano Tombangan Angkola'),
    (1203070, 'Angkola Timur'),
    (1203080, 'Angkola Selatan'),
    (1203090, 'Angkola Barat'),
    (1203091, 'Angkola Sangkunur'),
    (1203100, 'Batang Toru'),
    (1203101, 'Marancar'),
    (1203102, 'Muara Batang Toru'),
    (1203110, 'Sipirok'),
    (1203120, 'Arse'),
    (1203160, 'Saipar Dolok Hole'),
    (1203161, 'Aek Bilah'),
]

TARGETS = [
    ('1002', 'Jaringan Jalan Mantap', '%', 72),
    ('1004', 'Irigasi', '%', 65),
    ('1015', 'Harapan Lama Sekolah', 'tahun', 13.2),
    ('1016', 'Rata-rata Lama Sekolah', 'tahun', 8.9),
    ('1017', 'Indeks Pembangunan Manusia', 'poin', 70.5),
]

YEARS = [2023, 2024, 2025]


def amount(low, high):
    return Decimal(str(round(random.uniform(low, high), 2)))


class Command(BaseCommand):
    help = 'Load sample data for the Tapanuli Selatan kecamatan'

    def add_arguments(self, parser):
        parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible values')

    def handle(self, *args, **options):
        if options['seed'] is not None:
            random.seed(options['seed'])

        for kdkecamatan, nmkecamatan in KECAMATAN:
            kecamatan, created = Kecamatan.objects.get_or_create(
                kdkecamatan=kdkecamatan,
                kddesa=None,
                defaults={'nmkecamatan': nmkecamatan},
            )
            if not created:
                continue
            self.stdout.write(self.style.SUCCESS(f'Created kecamatan: {kecamatan.nmkecamatan}'))

            ruas = RuasJalan.objects.create(
                namaruasjalan=f'Jalan Lingkar {nmkecamatan}',
                kdkecamatan=str(kdkecamatan),
                nmkecamatan=nmkecamatan,
                panjangruas=amount(5, 40),
            )
            irigasi = RefIrigasi.objects.create(msirigasi=f'D.I. {nmkecamatan}', kdkecamatan=str(kdkecamatan))

            for year in YEARS:
                panjang = ruas.panjangruas
                baik = (panjang * amount(0.4, 0.9)).quantize(Decimal('0.01'))
                JalanKondisi.objects.create(
                    noruas=ruas.noruas,
                    namaruasjalan=ruas.namaruasjalan,
                    kdkecamatan=ruas.kdkecamatan,
                    nmkecamatan=nmkecamatan,
                    tahun=year,
                    kondisibaik=baik,
                    kondisisedang=panjang - baik,
                    kondisirusakringan=Decimal('0.00'),
                    kondisirusakberat=Decimal('0.00'),
                    verif=True,
                    username='sample',
                )
                luas = amount(50, 800)
                Irigasi.objects.create(
                    kdirigasi=irigasi.kdirigasi,
                    nmirigasi=irigasi.msirigasi,
                    kdkecamatan=irigasi.kdkecamatan,
                    nmkecamatan=nmkecamatan,
                    luas=luas,
                    tahun=year,
                    konirigasibaik=(luas * amount(0.3, 0.8)).quantize(Decimal('0.01')),
                    verif=True,
                    username='sample',
                )

            self.stdout.write(self.style.SUCCESS(f'Created road and irrigation data for {nmkecamatan}'))

        for kdiku, nmiku, satuan, base in TARGETS:
            for year in YEARS:
                TargetIndikator.objects.get_or_create(
                    kdiku=kdiku,
                    tahun=year,
                    defaults={'nmiku': nmiku, 'satuan': satuan, 'target': Decimal(str(base))},
                )
                RealisasiIndikator.objects.get_or_create(
                    kdiku=kdiku,
                    tahun=year,
                    defaults={'capaian': (Decimal(str(base)) * amount(0.9, 1.05)).quantize(Decimal('0.01'))},
                )

        self.stdout.write(self.style.SUCCESS('Successfully loaded sample data'))
