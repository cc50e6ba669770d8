import logging

from django.db import DEFAULT_DB_ALIAS, connections

logger = logging.getLogger(__name__)


def fetch_all(sql, params=None, using=DEFAULT_DB_ALIAS):
    """Run a parametrized query and return rows as dicts keyed by column name"""
    with connections[using].cursor() as cursor:
        cursor.execute(sql, params or [])
        columns = [column[0] for column in cursor.description]
        rows = [dict(zip(columns, row)) for row in cursor.fetchall()]
    logger.debug(f"Raw query on {using} returned {len(rows)} rows")
    return rows


def contains(term):
    """LIKE pattern matching term anywhere"""
    return f"%{term}%"
