from decimal import Decimal

import pytest
from django.test import Client

from apps.infrastructure.models import RefIrigasi, RuasJalan
from apps.regions.models import Kecamatan

API_KEY = 'test-key'


@pytest.fixture(autouse=True)
def api_settings(settings):
    settings.API_KEYS = [API_KEY]
    settings.API_KEY_USERS = ''
    settings.API_KEY_ADMIN = ''
    settings.DEBUG = False
    settings.JWT_SECRET = 'test-secret'
    settings.JWT_ALGORITHM = 'HS256'
    settings.PASSWORD_ROUNDS = 4
    settings.AUTH_COOKIE_SECURE = False
    return settings


@pytest.fixture
def api():
    return Client(headers={'x-api-key': API_KEY})


@pytest.fixture
def anonymous():
    return Client()


@pytest.fixture
def kecamatan(db):
    return Kecamatan.objects.create(kddesa=None, kdkecamatan=1203110, nmkecamatan='Sipirok')


@pytest.fixture
def ruas(db, kecamatan):
    return RuasJalan.objects.create(
        noruas=12,
        namaruasjalan='Jalan Sipirok - Arse',
        kdkecamatan='1203110',
        nmkecamatan='Sipirok',
        panjangruas=Decimal('10.00'),
    )


@pytest.fixture
def ref_irigasi(db, kecamatan):
    return RefIrigasi.objects.create(kdirigasi=7, msirigasi='D.I. Aek Sabaon', kdkecamatan='1203110')
