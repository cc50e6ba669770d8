from django.core.serializers.json import DjangoJSONEncoder
from django.http import JsonResponse

# Largest integer a JavaScript client can hold without losing precision
MAX_SAFE_INTEGER = 2 ** 53 - 1


def json_safe(data):
    """Turn integers a browser cannot represent into strings, recursively"""
    if isinstance(data, dict):
        return {key: json_safe(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [json_safe(value) for value in data]
    if isinstance(data, int) and not isinstance(data, bool) and abs(data) > MAX_SAFE_INTEGER:
        return str(data)
    return data


def api_response(data, status=200, **kwargs):
    """JsonResponse with Decimal as string and datetimes in ISO 8601"""
    return JsonResponse(
        json_safe(data),
        status=status,
        safe=False,
        encoder=DjangoJSONEncoder,
        json_dumps_params={'ensure_ascii': False},
        **kwargs,
    )


def model_to_dict(instance, fields=None, exclude=()):
    """Row as a dict keyed by database column name"""
    result = {}
    for field in instance._meta.concrete_fields:
        key = field.db_column or field.attname
        if fields is not None and key not in fields:
            continue
        if key in exclude:
            continue
        result[key] = getattr(instance, field.attname)
    return result
