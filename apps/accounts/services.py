import logging
import re

import bcrypt
from django.conf import settings

from apps.core.auth import sign_token
from apps.core.errors import BadRequest, Unauthorized
from .models import Admin

logger = logging.getLogger(__name__)

BCRYPT_PATTERN = re.compile(r'^\$(2[aby])\$(\d{2})\$')

MIN_PASSWORD = 8
MAX_PASSWORD = 72

PUBLIC_FIELDS = ('id', 'nipid', 'nmpengguna', 'username', 'kdopd', 'nmopd', 'level', 'datecreate', 'lockuser')


class PasswordService:
    @staticmethod
    def validate(plain):
        # bcrypt counts bytes, not characters
        if not isinstance(plain, str) or not MIN_PASSWORD <= len(plain.encode('utf-8')) <= MAX_PASSWORD:
            raise BadRequest(f'Password harus {MIN_PASSWORD}-{MAX_PASSWORD} karakter')
        return plain

    @staticmethod
    def hash(plain):
        salt = bcrypt.gensalt(rounds=settings.PASSWORD_ROUNDS)
        return bcrypt.hashpw(plain.encode('utf-8'), salt).decode('ascii')

    @staticmethod
    def check(plain, hashed):
        """Compare against a stored $2a$/$2b$/$2y$ hash; anything else never matches"""
        if not plain or not hashed or not BCRYPT_PATTERN.match(hashed):
            return False
        # bcrypt only knows the 2a/2b prefixes
        if hashed.startswith('$2y$'):
            hashed = '$2b$' + hashed[4:]
        try:
            return bcrypt.checkpw(plain.encode('utf-8'), hashed.encode('ascii'))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False


class SessionService:
    """Username/password login issuing a signed session token"""

    @staticmethod
    def public_user(admin):
        return {field: getattr(admin, field) for field in PUBLIC_FIELDS}

    @staticmethod
    def login(username, password):
        admin = Admin.objects.filter(username=username).first()
        if admin is None or not PasswordService.check(password, admin.password):
            logger.info(f"Failed login for {username}")
            raise Unauthorized('Username atau password salah')
        if admin.is_locked:
            logger.info(f"Locked account {username} tried to log in")
            raise Unauthorized('Akun dinonaktifkan')

        claims = {
            'sub': str(admin.id),
            'username': admin.username,
            'level': admin.level,
            'kdopd': admin.kdopd,
        }
        token = sign_token(claims)
        logger.info(f"Issued token for {admin.username}")
        return admin, token
