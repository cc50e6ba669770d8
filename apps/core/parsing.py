import re
from datetime import date
from decimal import Decimal, InvalidOperation

from .errors import BadRequest

DECIMAL_PATTERN = re.compile(r'^-?\d+(\.\d+)?$')
DIGITS_PATTERN = re.compile(r'^\d+$')


class Coerce:
    """Conversions for loosely typed request values (query strings and JSON bodies)"""

    @staticmethod
    def is_blank(value):
        return value is None or (isinstance(value, str) and value.strip() == '')

    @staticmethod
    def to_str(value, max_length=None, field=None):
        """Trimmed string, or None when empty"""
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        if max_length is not None and len(text) > max_length:
            raise BadRequest(f"{field or 'nilai'} maksimal {max_length} karakter")
        return text

    @staticmethod
    def to_int(value):
        """Integer value, or None when the value is empty or not a whole number"""
        if Coerce.is_blank(value) or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        text = str(value).strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        if not number.is_integer():
            return None
        return int(number)

    @staticmethod
    def to_number(value):
        """JSON number for aggregate columns; drivers hand back int, float, Decimal or str"""
        if value is None:
            return None
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, Decimal):
            return int(value) if value.as_tuple().exponent >= 0 else float(value)
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def to_decimal(value):
        """Decimal from a number or numeric string; a comma decimal separator is accepted"""
        if Coerce.is_blank(value):
            return None
        text = str(value).replace(',', '.', 1).strip()
        if not DECIMAL_PATTERN.match(text):
            raise BadRequest(f'Nilai desimal tidak valid: {value}')
        return Decimal(text)

    @staticmethod
    def to_bigint(value):
        """Non-negative integer given as digits only"""
        if Coerce.is_blank(value) or isinstance(value, bool):
            return None
        text = str(value).strip()
        if not DIGITS_PATTERN.match(text):
            return None
        return int(text)

    @staticmethod
    def to_bool(value):
        if value is None:
            return None
        return str(value).strip().lower() in ('true', '1')

    @staticmethod
    def to_year(value):
        """Four digit year, or None"""
        year = Coerce.to_int(value)
        if year is None or year < 1000 or year > 9999:
            return None
        return year

    @staticmethod
    def safe_int(value, default=0):
        """Safely convert value to integer"""
        if value is None or value == '' or value == 'NA':
            return default
        try:
            return int(float(str(value)))
        except (ValueError, TypeError):
            return default

    @staticmethod
    def safe_decimal(value, default='0.00'):
        """Safely convert value to Decimal"""
        if value is None or value == '' or value == 'NA':
            return Decimal(default)
        try:
            return Decimal(str(value).replace(',', '.', 1))
        except (ValueError, TypeError, InvalidOperation):
            return Decimal(default)


def require_int(body, field, minimum=None, message=None):
    """Read a mandatory integer from a request body"""
    value = Coerce.to_int(body.get(field))
    if value is None or (minimum is not None and value < minimum):
        if message is None:
            message = f'{field} wajib integer' + (f' >= {minimum}' if minimum is not None else '')
        raise BadRequest(message)
    return value


def require_str(body, field, max_length=None):
    value = Coerce.to_str(body.get(field), max_length=max_length, field=field)
    if value is None:
        suffix = f' (maks {max_length} karakter)' if max_length else ''
        raise BadRequest(f'{field} wajib diisi{suffix}')
    return value


def path_id(value, field='id'):
    """Positive integer path parameter"""
    number = Coerce.to_bigint(value)
    if not number:
        raise BadRequest(f'{field} tidak valid')
    return number


def path_year(value):
    """Year path parameter limited to 1900-3000"""
    year = Coerce.to_int(value)
    if year is None or year < 1900 or year > 3000:
        raise BadRequest('tahun tidak valid')
    return year


def query_limit(request, default=1000, maximum=5000):
    limit = Coerce.to_int(request.GET.get('limit'))
    if limit is None or limit <= 0:
        limit = default
    return min(limit, maximum)


def current_year():
    return date.today().year
