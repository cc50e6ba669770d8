import logging

from apps.core.errors import NotFound
from apps.core.parsing import Coerce
from .models import KualitasSdm, TargetIndikator
from .queries import TargetRealisasiPivot

logger = logging.getLogger(__name__)

KUALITAS_SDM = TargetRealisasiPivot({
    '1015': ('targetharapanlamasekolah', 'harapanlamasekolah'),
    '1016': ('targetrata2lamasekolah', 'rata2lamasekolah'),
    '1017': ('targetipm', 'ipm'),
})

LINGKUNGAN_HIDUP = TargetRealisasiPivot({
    '1024': ('target_iklh', 'iklh'),
    '1025': ('target_penurunan_intensitas', 'penurunan_intensitas'),
})

KESEHATAN = {'1018': 'nilaiusia', '1019': 'nilaistunting', '1020': 'nilaitbc'}
KESEJAHTERAAN = {'1011': 'nilaimiskin', '1012': 'nilaiinflasi', '1013': 'nilainganggur'}
PERKAPITA = {'1008': 'pert_ekonomi', '1009': 'pdrb_perkapita', '1010': 'kontribusi_kabupaten'}
AKIP = ('1021', '1022', '1023')

# tblkualitassdm stores the short IKU code
KUALITAS_SDM_FIELDS = {
    '15': 'harapanlamasekolah',
    '16': 'rata2lamasekolah',
    '17': 'ipm',
}


class IndicatorService:
    """Shapes IKU target rows for the dashboard widgets"""

    @staticmethod
    def kualitas_sdm():
        # id is the last two digits of the year
        return [{'id': str(row['tahun'])[-2:], **row} for row in KUALITAS_SDM.rows()]

    @staticmethod
    def lingkungan_hidup():
        return LINGKUNGAN_HIDUP.rows()

    @staticmethod
    def targets_by_year(columns, as_string=False):
        """Pivot targets of the kdiku in columns into one row per year (tahun as string)"""
        rows = {}
        targets = TargetIndikator.objects.filter(kdiku__in=columns).order_by('tahun', 'kdiku')
        for target in targets:
            tahun = str(target.tahun)
            if tahun not in rows:
                rows[tahun] = {'tahun': tahun, **{column: None for column in columns.values()}}
            if target.target is None:
                value = None
            elif as_string:
                value = str(target.target)
            else:
                value = Coerce.to_number(target.target)
            rows[tahun][columns[target.kdiku]] = value
        return list(rows.values())

    @staticmethod
    def kualitas_sdm_value(id_data):
        """One tblkualitassdm row as {tahun, <field>}; the field depends on its kdiku"""
        row = KualitasSdm.objects.filter(id_data=id_data).first()
        if row is None:
            raise NotFound('Data tidak ditemukan')

        result = {'tahun': str(row.tahun)}
        field = KUALITAS_SDM_FIELDS.get(row.kdiku)
        if field:
            result[field] = Coerce.to_number(row.nilai)
        else:
            logger.debug(f"No field mapping for kualitas SDM kdiku {row.kdiku}")
        return result
