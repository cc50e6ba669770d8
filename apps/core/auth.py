import hmac
import logging
from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .errors import Unauthorized

logger = logging.getLogger(__name__)

API_KEY = 'api_key'
JWT = 'jwt'

ACCEPTED_ALGORITHMS = ['HS256', 'HS512']


def configured_api_keys():
    keys = [settings.API_KEY_USERS, settings.API_KEY_ADMIN, *settings.API_KEYS]
    return [key for key in keys if key]


def has_valid_api_key(request):
    """Check x-api-key (or ?api_key=) against the configured keys"""
    keys = configured_api_keys()
    if not keys:
        # Open access only while developing
        return settings.DEBUG

    supplied = request.headers.get('x-api-key') or request.GET.get('api_key') or ''
    supplied = supplied.strip().encode()
    return any(hmac.compare_digest(supplied, key.encode()) for key in keys)


def get_token(request):
    """Bearer token from the Authorization header, falling back to the auth cookie"""
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        token = header[len('Bearer '):].strip()
        if token:
            return token
    return request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None


def sign_token(claims):
    secret = settings.JWT_SECRET
    if not secret:
        raise ImproperlyConfigured('JWT_SECRET is not configured')

    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        'iat': now,
        'exp': now + timedelta(seconds=settings.JWT_EXPIRES_SECONDS),
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(token):
    """Decoded claims, or None when the token is missing, expired or forged"""
    secret = settings.JWT_SECRET
    if not token or not secret:
        return None
    try:
        return jwt.decode(token, secret, algorithms=ACCEPTED_ALGORITHMS)
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected invalid token: {e}")
    return None


def authenticate(request, mode):
    """Return the JWT claims (or an empty dict for API key access); raise Unauthorized otherwise"""
    if mode == API_KEY:
        if has_valid_api_key(request):
            return {}
        claims = verify_token(get_token(request))
        if claims is not None:
            return claims
        raise Unauthorized('Masukkan API KEY')

    if mode == JWT:
        claims = verify_token(get_token(request))
        if claims is None:
            raise Unauthorized('Unauthorized')
        return claims

    raise ImproperlyConfigured(f'Unknown auth mode: {mode}')
