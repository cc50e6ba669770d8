import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_list(name):
    return [item.strip() for item in os.environ.get(name, '').split(',') if item.strip()]


def database_from_env(prefix, default_name):
    """Build a DATABASES entry from <prefix>ENGINE, <prefix>NAME, ... variables"""
    engine = os.environ.get(f'{prefix}ENGINE', 'django.db.backends.sqlite3')

    if engine.endswith('sqlite3'):
        return {
            'ENGINE': engine,
            'NAME': os.environ.get(f'{prefix}NAME', str(BASE_DIR / default_name)),
        }

    config = {
        'ENGINE': engine,
        'NAME': os.environ.get(f'{prefix}NAME', ''),
        'USER': os.environ.get(f'{prefix}USER', ''),
        'PASSWORD': os.environ.get(f'{prefix}PASSWORD', ''),
        'HOST': os.environ.get(f'{prefix}HOST', 'localhost'),
        'PORT': os.environ.get(f'{prefix}PORT', ''),
        'CONN_MAX_AGE': int(os.environ.get(f'{prefix}CONN_MAX_AGE', '60')),
    }
    if 'mysql' in engine:
        config['OPTIONS'] = {'charset': 'utf8mb4'}
    return config


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-tapsel-dashboard-dev-key')

DEBUG = env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = env_list('DJANGO_ALLOWED_HOSTS') or (['*'] if DEBUG else ['localhost', '127.0.0.1'])

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.core',
    'apps.regions',
    'apps.infrastructure',
    'apps.health',
    'apps.indicators',
    'apps.accounts',
    'apps.finance',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'tapsel_dashboard.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'tapsel_dashboard.wsgi.application'

# Main reporting schema plus the regional finance schema used by bpkpad/belanja
DATABASES = {
    'default': database_from_env('DB_', 'db.sqlite3'),
    'sitarida': database_from_env('SITARIDA_DB_', 'sitarida.sqlite3'),
}

DATABASE_ROUTERS = ['apps.finance.routers.SitaridaRouter']

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'id'
TIME_ZONE = os.environ.get('TZ', 'Asia/Jakarta')
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

APPEND_SLASH = False

# API access
API_KEY_USERS = os.environ.get('API_KEY_USERS', '')
API_KEY_ADMIN = os.environ.get('API_KEY_ADMIN', '')
API_KEYS = env_list('API_KEYS')

JWT_SECRET = os.environ.get('JWT_SECRET', '')
JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')
JWT_EXPIRES_SECONDS = int(os.environ.get('JWT_EXPIRES_SECONDS', '3600'))
AUTH_COOKIE_NAME = 'token'
AUTH_COOKIE_SECURE = env_bool('AUTH_COOKIE_SECURE', not DEBUG)

PASSWORD_ROUNDS = int(os.environ.get('SALT_ROUNDS', '12'))

BELANJA_DEFAULT_YEAR = os.environ.get('BELANJA_DEFAULT_YEAR', '2025')

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'django.request': {
            'handlers': ['console'],
            'level': 'ERROR',
            'propagate': False,
        },
    },
}
