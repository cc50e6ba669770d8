import logging

from apps.core.parsing import Coerce
from .models import Kecamatan

logger = logging.getLogger(__name__)


class KecamatanService:
    """Lookups against the kecamatan reference table"""

    @staticmethod
    def exists(kdkecamatan):
        code = Coerce.to_int(kdkecamatan)
        if code is None:
            return False
        return Kecamatan.objects.filter(kdkecamatan=code).exists()

    @staticmethod
    def name_for(kdkecamatan):
        """nmkecamatan for a code, or None when the code is not numeric or unknown"""
        code = Coerce.to_int(kdkecamatan)
        if code is None or code <= 0:
            return None
        return (
            Kecamatan.objects.filter(kdkecamatan=code)
            .values_list('nmkecamatan', flat=True)
            .first()
        )

    @staticmethod
    def sync_pair(model, kdkecamatan, nmkecamatan):
        """Make (kd, nm) consistent with rows already stored in model.

        The name wins: a known name pulls its code, then the code pulls the
        canonical spelling of the name.
        """
        kd, nm = kdkecamatan, nmkecamatan

        if nm:
            known_kd = (
                model.objects.filter(nmkecamatan=nm)
                .values_list('kdkecamatan', flat=True)
                .first()
            )
            if known_kd is not None:
                kd = known_kd

        if kd is not None:
            known_nm = (
                model.objects.filter(kdkecamatan=kd)
                .values_list('nmkecamatan', flat=True)
                .first()
            )
            if known_nm:
                nm = known_nm

        if (kd, nm) != (kdkecamatan, nmkecamatan):
            logger.info(f"Kecamatan synced for {model._meta.db_table}: {kdkecamatan}/{nmkecamatan} -> {kd}/{nm}")
        return kd, nm
