import json

from .errors import BadRequest
from .parsing import Coerce

USERNAME_HEADERS = ('x-username', 'x-user', 'x-api-user')


def read_json(request):
    """Request body as a dict; an empty body counts as {}"""
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest('Body JSON tidak valid')
    if not isinstance(body, dict):
        raise BadRequest('Body JSON harus berupa object')
    return body


def request_username(request, body=None):
    """Audit username: body first, then the x-username / x-user / x-api-user headers, then the token"""
    if body:
        username = Coerce.to_str(body.get('username'))
        if username:
            return username
    for header in USERNAME_HEADERS:
        username = Coerce.to_str(request.headers.get(header))
        if username:
            return username
    claims = getattr(request, 'auth_claims', None) or {}
    return claims.get('username')
