from apps.core.db import fetch_all
from apps.core.parsing import Coerce
from .routers import SITARIDA_DB


class BelanjaQuery:
    """Spending budget (pagu) against realisation per SKPD and 6 digit account.

    Only expenditure accounts (kd_rek6 starting with 5) are included. Budget
    and realisation rows are combined with UNION ALL so equal amounts from
    both sides are never collapsed.
    """

    SQL = """
        SELECT
            a.kd_skpd,
            MAX(s.nm_skpd) AS nm_skpd,
            a.rek,
            MAX(r.nm_rek3) AS nmrek,
            SUM(a.pagu) AS pagu,
            SUM(a.capaian) AS capaian,
            ROUND(100.0 * SUM(a.capaian) / NULLIF(SUM(a.pagu), 0), 2) AS persen
        FROM (
            SELECT kd_skpd, SUBSTR(kd_rek6, 1, 6) AS rek, SUM(nilai_ubah) AS pagu, 0 AS capaian
            FROM trdrka
            WHERE SUBSTR(kd_rek6, 1, 1) = '5'
            GROUP BY kd_skpd, SUBSTR(kd_rek6, 1, 6)
            UNION ALL
            SELECT kd_skpd, SUBSTR(kd_rek6, 1, 6) AS rek, 0 AS pagu, SUM(debet - kredit) AS capaian
            FROM trdmaping_skpd
            WHERE SUBSTR(kd_rek6, 1, 1) = '5'
            GROUP BY kd_skpd, SUBSTR(kd_rek6, 1, 6)
        ) a
        LEFT JOIN ms_skpd s ON s.kd_skpd = a.kd_skpd
        LEFT JOIN ms_rek3 r ON r.kd_rek3 = a.rek
        {where}
        GROUP BY a.kd_skpd, a.rek
        ORDER BY a.kd_skpd, a.rek
    """

    @classmethod
    def rows(cls, tahun, kd_skpd=None, rek=None):
        clauses, params = [], []
        if kd_skpd:
            clauses.append("a.kd_skpd = %s")
            params.append(kd_skpd)
        if rek:
            clauses.append("a.rek = %s")
            params.append(rek)
        where = "WHERE " + " AND ".join(clauses) if clauses else ""

        result = []
        for row in fetch_all(cls.SQL.format(where=where), params, using=SITARIDA_DB):
            result.append({
                'kd_skpd': row['kd_skpd'],
                'nm_skpd': row['nm_skpd'],
                'rek': row['rek'],
                'nmrek': row['nmrek'],
                'pagu': Coerce.to_number(row['pagu']),
                'capaian': Coerce.to_number(row['capaian']),
                'persen': Coerce.to_number(row['persen']),
                # the SITARIDA database holds a single budget year
                'tahun': tahun,
            })
        return result
