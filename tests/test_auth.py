import jwt
import pytest
from django.test import Client

from apps.core.auth import sign_token, verify_token


@pytest.mark.django_db
class TestApiKey:
    def test_missing_key_is_rejected(self, anonymous):
        response = anonymous.get('/api/ref-kecamatan')
        assert response.status_code == 401
        assert response.json() == {'error': 'Masukkan API KEY'}

    def test_wrong_key_is_rejected(self):
        response = Client(headers={'x-api-key': 'nope'}).get('/api/ref-kecamatan')
        assert response.status_code == 401

    def test_valid_key(self, api):
        assert api.get('/api/ref-kecamatan').status_code == 200

    def test_query_string_key(self, anonymous):
        assert anonymous.get('/api/ref-kecamatan', {'api_key': 'test-key'}).status_code == 200

    def test_bearer_token_is_accepted_instead_of_key(self, anonymous):
        token = sign_token({'sub': '1', 'username': 'operator'})
        response = anonymous.get('/api/ref-kecamatan', headers={'Authorization': f'Bearer {token}'})
        assert response.status_code == 200

    def test_open_when_debug_and_no_keys(self, anonymous, settings):
        settings.API_KEYS = []
        settings.DEBUG = True
        assert anonymous.get('/api/ref-kecamatan').status_code == 200

    def test_wrong_method(self, api):
        assert api.patch('/api/ref-kecamatan').status_code == 405


class TestTokens:
    def test_round_trip_claims(self):
        token = sign_token({'sub': '3', 'username': 'andi'})
        claims = verify_token(token)
        assert claims['sub'] == '3'
        assert claims['username'] == 'andi'

    def test_forged_token(self):
        token = jwt.encode({'sub': '1'}, 'another-secret', algorithm='HS256')
        assert verify_token(token) is None

    def test_expired_token(self):
        token = jwt.encode({'sub': '1', 'exp': 1}, 'test-secret', algorithm='HS256')
        assert verify_token(token) is None
