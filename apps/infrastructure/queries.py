"""Raw joins used by the condition listings.

The condition tables carry codes only; names come from the reference tables,
so the listings read through LEFT JOINs instead of the ORM.
refkecamatan holds one row per desa, hence the grouped subquery.
"""
from apps.core.db import contains, fetch_all


class JalanKondisiQuery:
    BASE_SELECT = """
        SELECT
            jk.id,
            jk.noruas,
            rj.namaruasjalan,
            rj.kdkecamatan AS kdkecamatan,
            rk.nmkecamatan AS namakecamatan,
            jk.tahun,
            jk.kondisibaik,
            jk.kondisisedang,
            jk.kondisirusakringan,
            jk.kondisirusakberat,
            jk.lhr,
            jk.akses
        FROM tbljalankondisi AS jk
        LEFT JOIN tblruasjalan AS rj ON rj.noruas = jk.noruas
        LEFT JOIN (
            SELECT kdkecamatan, MAX(nmkecamatan) AS nmkecamatan FROM refkecamatan GROUP BY kdkecamatan
        ) AS rk ON rk.kdkecamatan = rj.kdkecamatan
    """

    @staticmethod
    def first_for_ruas(noruas):
        rows = fetch_all(
            JalanKondisiQuery.BASE_SELECT
            + " WHERE jk.noruas = %s ORDER BY jk.tahun DESC LIMIT 1",
            [noruas],
        )
        return rows[0] if rows else None

    @staticmethod
    def search(term, limit):
        sql = JalanKondisiQuery.BASE_SELECT
        params = []
        if term:
            clauses = [
                "rj.namaruasjalan LIKE %s",
                "rk.nmkecamatan LIKE %s",
                "jk.akses LIKE %s",
            ]
            params.extend([contains(term)] * 3)
            if term.isdigit():
                clauses.append("jk.noruas = %s")
                params.append(int(term))
            sql += " WHERE (" + " OR ".join(clauses) + ")"
        sql += " ORDER BY jk.noruas DESC, jk.tahun DESC LIMIT %s"
        params.append(limit)
        return fetch_all(sql, params)


class IrigasiQuery:
    BASE_SELECT = """
        SELECT
            a.id,
            a.kdirigasi,
            COALESCE(b.msirigasi, a.nmirigasi) AS msirigasi,
            a.kdkecamatan,
            COALESCE(c.nmkecamatan, a.nmkecamatan) AS nmkecamatan,
            a.luas,
            a.tahun,
            a.konirigasibaik,
            a.konirigasisedang,
            a.konirigasirusakringan,
            a.konirigasirusakberat,
            a.verif,
            a.username,
            a.aksi,
            a.datecreate
        FROM tblirigasi a
        LEFT JOIN refirigasi b ON a.kdirigasi = b.kdirigasi
        LEFT JOIN (
            SELECT kdkecamatan, MAX(nmkecamatan) AS nmkecamatan FROM refkecamatan GROUP BY kdkecamatan
        ) c ON a.kdkecamatan = c.kdkecamatan
    """

    @staticmethod
    def single(kdirigasi, tahun):
        rows = fetch_all(
            IrigasiQuery.BASE_SELECT + " WHERE a.kdirigasi = %s AND a.tahun = %s LIMIT 1",
            [kdirigasi, tahun],
        )
        return rows[0] if rows else None

    @staticmethod
    def search(kdirigasi=None, tahun=None, term=None, limit=1000):
        clauses, params = [], []
        if kdirigasi:
            clauses.append("a.kdirigasi = %s")
            params.append(kdirigasi)
        if tahun:
            clauses.append("a.tahun = %s")
            params.append(tahun)
        if term:
            clauses.append("(b.msirigasi LIKE %s OR c.nmkecamatan LIKE %s OR a.kdkecamatan LIKE %s)")
            params.extend([contains(term)] * 3)

        sql = IrigasiQuery.BASE_SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY a.tahun DESC, a.kdirigasi ASC LIMIT %s"
        params.append(limit)
        return fetch_all(sql, params)


class RefIrigasiQuery:
    BASE_SELECT = """
        SELECT a.kdirigasi, a.msirigasi, a.kdkecamatan, b.nmkecamatan
        FROM refirigasi a
        LEFT JOIN (
            SELECT kdkecamatan, MAX(nmkecamatan) AS nmkecamatan FROM refkecamatan GROUP BY kdkecamatan
        ) b ON a.kdkecamatan = b.kdkecamatan
    """

    @staticmethod
    def single(kdirigasi):
        rows = fetch_all(RefIrigasiQuery.BASE_SELECT + " WHERE a.kdirigasi = %s", [kdirigasi])
        return rows[0] if rows else None

    @staticmethod
    def search(term=None, kdkecamatan=None):
        clauses, params = [], []
        if term:
            match = ["a.msirigasi LIKE %s", "b.nmkecamatan LIKE %s"]
            params.extend([contains(term)] * 2)
            if term.isdigit():
                match.append("a.kdirigasi = %s")
                params.append(int(term))
            clauses.append("(" + " OR ".join(match) + ")")
        if kdkecamatan:
            clauses.append("a.kdkecamatan = %s")
            params.append(kdkecamatan)

        sql = RefIrigasiQuery.BASE_SELECT
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY a.kdkecamatan, a.kdirigasi"
        return fetch_all(sql, params)
