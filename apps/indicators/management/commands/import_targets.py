import csv
import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.core.errors import BadRequest
from apps.core.parsing import Coerce
from apps.indicators.models import RealisasiIndikator, TargetIndikator

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Import IKU targets and realisations from a CSV file (kdiku,nmiku,tahun,target,satuan,capaian)'

    def add_arguments(self, parser):
        parser.add_argument('file', type=str, help='CSV file with a header row')
        parser.add_argument(
            '--delimiter',
            type=str,
            default=',',
            help='Column delimiter (default: ,)'
        )

    def handle(self, *args, **options):
        path = options['file']
        self.stdout.write(self.style.SUCCESS(f'Importing IKU data from {path}...'))

        try:
            with open(path, newline='', encoding='utf-8-sig') as handle:
                rows = list(csv.DictReader(handle, delimiter=options['delimiter']))
        except OSError as e:
            raise CommandError(f'Cannot read {path}: {e}')

        targets = realisations = failed = 0

        for line, row in enumerate(rows, start=2):
            try:
                with transaction.atomic():
                    saved_target, saved_realisation = self.import_row(row)
                targets += saved_target
                realisations += saved_realisation
            except (ValueError, BadRequest) as e:
                failed += 1
                logger.error(f"Line {line}: {e}")
                self.stdout.write(self.style.ERROR(f'  Line {line} skipped: {e}'))

        self.stdout.write(self.style.SUCCESS(
            f'\nDone! {targets} targets, {realisations} realisations, {failed} failed rows'
        ))

    def import_row(self, row):
        kdiku = Coerce.to_str(row.get('kdiku'))
        tahun = Coerce.to_year(row.get('tahun'))
        if not kdiku or tahun is None:
            raise ValueError('kdiku and a 4 digit tahun are required')

        saved_target = saved_realisation = 0

        if not Coerce.is_blank(row.get('target')):
            nmiku = Coerce.to_str(row.get('nmiku'))
            if not nmiku:
                raise ValueError(f'nmiku is required for the target of {kdiku}/{tahun}')
            target, created = TargetIndikator.objects.update_or_create(
                kdiku=kdiku,
                tahun=tahun,
                defaults={
                    'nmiku': nmiku,
                    'target': Coerce.to_decimal(row['target']),
                    'satuan': Coerce.to_str(row.get('satuan')),
                }
            )
            action = 'Created' if created else 'Updated'
            logger.info(f"{action} target {target}")
            saved_target = 1

        if not Coerce.is_blank(row.get('capaian')):
            RealisasiIndikator.objects.update_or_create(
                kdiku=kdiku,
                tahun=tahun,
                defaults={'capaian': Coerce.to_decimal(row['capaian'])}
            )
            saved_realisation = 1

        if not (saved_target or saved_realisation):
            raise ValueError(f'no target or capaian for {kdiku}/{tahun}')
        return saved_target, saved_realisation
