import logging

from django.utils import timezone

from .errors import BadRequest, NotFound
from .http import request_username
from .models import Aksi

logger = logging.getLogger(__name__)


def whitelist(body, parsers, business_fields=None):
    """Build an update payload from the whitelisted fields that were sent.

    parsers maps a body key to a callable returning the stored value; keys
    that parse to None are dropped. At least one business field must remain.
    """
    if not body:
        raise BadRequest('Tidak ada field untuk diupdate')

    data = {}
    for key, parse in parsers.items():
        if key not in body:
            continue
        value = parse(body[key])
        if value is not None:
            data[key] = value

    required = parsers.keys() if business_fields is None else business_fields
    if not any(key in data for key in required):
        raise BadRequest('Tidak ada field data yang diupdate')
    return data


def audit_stamp(request, body, aksi=Aksi.EDIT):
    stamp = {'aksi': aksi, 'datecreate': timezone.now()}
    username = request_username(request, body)
    if username:
        stamp['username'] = username
    return stamp


def update_from_year(model, request, body, key, tahun, data):
    """Apply data to every row of one series (key) from tahun onwards.

    key is a {field: value} filter identifying the series, e.g. {'noruas': 12}.
    Returns the response body describing what was applied.
    """
    applied = {**data, **audit_stamp(request, body)}
    if any(field.name == 'updated_at' for field in model._meta.concrete_fields):
        applied['updated_at'] = timezone.now()

    updated = model.objects.filter(**key, tahun__gte=tahun).update(**applied)
    if updated == 0:
        label = ', '.join(f"{name}={value}" for name, value in key.items())
        raise NotFound(f'Tidak ada baris yang cocok ({label}, tahun>={tahun})')

    logger.info(f"Updated {updated} {model._meta.db_table} rows for {key} from {tahun}")
    return {
        'ok': True,
        'updated': updated,
        'scope': {**key, 'tahun_gte': tahun},
        'applied': applied,
    }
