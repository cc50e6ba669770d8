"""Aggregation queries behind the indicator summaries.

Each summary combines target rows from tbltargetindikator with achievements
computed from the sector tables, as a UNION ALL of per-source SELECTs grouped
once more on the outside. The SQL runs unchanged on MySQL and SQLite:
ratios are computed as 100.0 * part / whole so integer sums never truncate,
and every division is guarded against a zero or missing denominator.
"""
import logging

from apps.core.db import fetch_all
from apps.core.parsing import Coerce
from .models import TargetIndikator

logger = logging.getLogger(__name__)

INFRASTRUKTUR_IKU = ('1001', '1002', '1003', '1004', '1005', '1006', '1007')

INFRASTRUKTUR_NAMES = {
    '1001': 'Infrastruktur',
    '1002': 'Jaringan Jalan Mantap',
    '1003': 'Jembatan',
    '1004': 'Irigasi',
    '1005': 'Air Minum',
    '1006': 'Listrik',
    '1007': 'Telekomunikasi',
}

RTLH_IKU = '1026'


def placeholders(values):
    return ', '.join(['%s'] * len(values))


def ratio(part, whole):
    """SQL expression for part / whole * 100, 0 when whole is 0 or NULL"""
    return f"CASE WHEN {whole} IS NULL OR {whole} = 0 THEN 0 ELSE 100.0 * {part} / {whole} END"


class InfrastrukturSummary:
    """Targets and achievements of the infrastructure IKUs 1001-1007 per year"""

    ACHIEVEMENTS = (
        # 1002: share of road length in good condition
        f"""
        SELECT '1002' AS id, z.tahun, 0 AS target, {ratio('z.kondisibaik', 'z.panjangjalan')} AS capaian
        FROM (
            SELECT b.tahun, SUM(a.panjangruas) AS panjangjalan, SUM(b.kondisibaik) AS kondisibaik
            FROM tblruasjalan a
            INNER JOIN tbljalankondisi b ON a.noruas = b.noruas
            GROUP BY b.tahun
        ) z
        """,
        # 1003: share of active bridges in good condition
        f"""
        SELECT '1003' AS id, x.tahun, 0 AS target, {ratio('x.konbaik', 'x.totaljembatan')} AS capaian
        FROM (
            SELECT b.tahun, COUNT(*) AS totaljembatan,
                   SUM(CASE WHEN b.kondisi = 'BAIK' THEN 1 ELSE 0 END) AS konbaik
            FROM tbljembatan b
            WHERE b.aktif = %s
            GROUP BY b.tahun
        ) x
        """,
        # 1004: share of irrigated area in good condition
        f"""
        SELECT '1004' AS id, x.tahun, 0 AS target, {ratio('x.konbaik', 'x.luasirigasi')} AS capaian
        FROM (
            SELECT b.tahun, SUM(b.luas) AS luasirigasi, SUM(b.konirigasibaik) AS konbaik
            FROM refirigasi a
            INNER JOIN tblirigasi b ON a.kdirigasi = b.kdirigasi
            GROUP BY b.tahun
        ) x
        """,
        # 1005: population with safe drinking water
        f"""
        SELECT '1005' AS id, x.tahun, 0 AS target, {ratio('x.jmlairminumlayak', 'x.jmlpenduduk')} AS capaian
        FROM (
            SELECT b.tahun, SUM(b.jmlpenduduk) AS jmlpenduduk, SUM(b.jmlairminumlayak) AS jmlairminumlayak
            FROM tblaksesairminum b
            GROUP BY b.tahun
        ) x
        """,
        # 1006: electricity demand against available supply
        f"""
        SELECT '1006' AS id, x.tahun, 0 AS target, {ratio('x.dayadibutuhkan', 'x.dayatersedia')} AS capaian
        FROM (
            SELECT b.tahun, SUM(b.dayatersedia) AS dayatersedia, SUM(b.dayadibutuhkan) AS dayadibutuhkan
            FROM tbldayalistrik b
            GROUP BY b.tahun
        ) x
        """,
        # 1007: villages with telecommunication coverage
        f"""
        SELECT '1007' AS id, z.tahun, 0 AS target, {ratio('z.desaterlayani', 'z.totaldesa')} AS capaian
        FROM (
            SELECT a.tahun, SUM(a.totaldesa) AS totaldesa, SUM(a.desaterlayani) AS desaterlayani
            FROM tblikucakupantelekomunikasi a
            GROUP BY a.tahun
        ) z
        """,
    )

    @classmethod
    def sql(cls):
        targets = f"""
        SELECT a.kdiku AS id, a.tahun, a.target, 0 AS capaian
        FROM tbltargetindikator a
        WHERE a.kdiku IN ({placeholders(INFRASTRUKTUR_IKU)})
        """
        union = '\nUNION ALL\n'.join((targets,) + cls.ACHIEVEMENTS)
        return f"""
        SELECT k.id, k.tahun, SUM(k.target) AS target, ROUND(SUM(k.capaian), 2) AS capaian
        FROM ({union}) k
        GROUP BY k.id, k.tahun
        ORDER BY k.id, k.tahun
        """

    @classmethod
    def rows(cls):
        params = list(INFRASTRUKTUR_IKU) + [True]
        labels = dict(
            TargetIndikator.objects.filter(kdiku__in=INFRASTRUKTUR_IKU)
            .order_by('tahun')
            .values_list('kdiku', 'nmiku')
        )
        result = []
        for row in fetch_all(cls.sql(), params):
            kdiku = str(row['id'])
            result.append({
                'id': kdiku,
                'indikator': labels.get(kdiku) or INFRASTRUKTUR_NAMES.get(kdiku, kdiku),
                'tahun': Coerce.to_int(row['tahun']),
                'target': Coerce.to_number(row['target']),
                'capaian': Coerce.to_number(row['capaian']),
            })
        return result


class TargetRealisasiPivot:
    """Targets and realisations of several IKUs pivoted into one row per year.

    columns maps kdiku to the (target column, realisation column) pair it
    feeds, e.g. {'1024': ('target_iklh', 'iklh')}.
    """

    def __init__(self, columns):
        self.columns = columns

    def sql(self):
        selects, params = [], []
        for kdiku, (target_column, realisasi_column) in self.columns.items():
            selects.append(f"SUM(CASE WHEN z.src = 'T' AND z.kdiku = %s THEN z.nilai ELSE 0 END) AS {target_column}")
            selects.append(f"SUM(CASE WHEN z.src = 'R' AND z.kdiku = %s THEN z.nilai ELSE 0 END) AS {realisasi_column}")
            params.extend([kdiku, kdiku])

        codes = list(self.columns)
        sql = f"""
        SELECT z.tahun, {', '.join(selects)}
        FROM (
            SELECT 'T' AS src, kdiku, tahun, target AS nilai
            FROM tbltargetindikator WHERE kdiku IN ({placeholders(codes)})
            UNION ALL
            SELECT 'R' AS src, kdiku, tahun, capaian AS nilai
            FROM tblrealikhk WHERE kdiku IN ({placeholders(codes)})
        ) z
        GROUP BY z.tahun
        ORDER BY z.tahun
        """
        return sql, params + codes + codes

    def rows(self):
        sql, params = self.sql()
        result = []
        for row in fetch_all(sql, params):
            result.append({key: Coerce.to_number(value) for key, value in row.items()})
        return result


class CapaianRtlh:
    """RTLH target (IKU 1026) against the share of uninhabitable houses per year"""

    @staticmethod
    def sql():
        return f"""
        SELECT z.id, z.tahun, SUM(z.target) AS target, ROUND(SUM(z.capaian), 2) AS capaian
        FROM (
            SELECT kdiku AS id, tahun, target, 0 AS capaian
            FROM tbltargetindikator
            WHERE kdiku = %s
            UNION ALL
            SELECT %s AS id, tahun, 0 AS target, {ratio('SUM(jlrtlh)', 'SUM(jltotalrt)')} AS capaian
            FROM tblrtlhkec
            GROUP BY tahun
        ) z
        GROUP BY z.id, z.tahun
        ORDER BY z.tahun
        """

    @classmethod
    def rows(cls):
        result = []
        for row in fetch_all(cls.sql(), [RTLH_IKU, RTLH_IKU]):
            result.append({
                'id': str(row['id']),
                'tahun': Coerce.to_int(row['tahun']),
                'target': two_decimals(row['target']),
                'capaian': two_decimals(row['capaian']),
            })
        return result


def two_decimals(number):
    number = Coerce.to_number(number)
    if number is None:
        return None
    return f"{number:.2f}"


class IndexDayaSaing:
    """Competitiveness index rows summed per (iddys, kdiku, tahun)"""

    SQL = """
        SELECT iddys AS id, MAX(nmdys) AS indikator, kdiku, MAX(nmiku) AS nmiku, tahun,
               SUM(target) AS target, SUM(capaian) AS capaian
        FROM tbltargetdayasaing
        GROUP BY iddys, kdiku, tahun
        ORDER BY iddys, kdiku, tahun
    """

    @classmethod
    def rows(cls):
        return [
            {
                'id': str(row['id']),
                'indikator': row['indikator'],
                'kdiku': row['kdiku'],
                'nmiku': row['nmiku'],
                'tahun': Coerce.to_int(row['tahun']),
                'target': Coerce.to_number(row['target']),
                'capaian': Coerce.to_number(row['capaian']),
            }
            for row in fetch_all(cls.SQL)
        ]
