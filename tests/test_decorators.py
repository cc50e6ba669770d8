import logging

import pytest
from django.db import IntegrityError
from django.test import RequestFactory

from apps.core.decorators import api_view, integrity_error


def failing_view(exc):
    @api_view(['POST'])
    def view(request):
        raise exc

    return view


def call(view):
    request = RequestFactory().post('/api/test', '{}', content_type='application/json', HTTP_X_API_KEY='test-key')
    return view(request)


class TestIntegrityError:
    def test_unique_violation_is_conflict(self):
        assert integrity_error(IntegrityError('UNIQUE constraint failed: penduduk.kdkecamatan')) == (409, 'Data sudah ada')

    def test_mysql_duplicate_entry_is_conflict(self):
        exc = IntegrityError(1062, "Duplicate entry '1203110-2024' for key 'uniq'")
        assert integrity_error(exc) == (409, 'Data sudah ada')

    def test_null_column_is_bad_request(self):
        assert integrity_error(IntegrityError(1048, "Column 'nmkecamatan' cannot be null"))[0] == 400
        assert integrity_error(IntegrityError('NOT NULL constraint failed: penduduk.nmkecamatan'))[0] == 400

    def test_foreign_key_is_conflict(self):
        status, message = integrity_error(IntegrityError('FOREIGN KEY constraint failed'))
        assert status == 409
        assert message == 'Tidak dapat menghapus data karena masih digunakan'


@pytest.mark.django_db
class TestApiView:
    def test_unique_violation(self):
        response = call(failing_view(IntegrityError('UNIQUE constraint failed: ref_kecamatan.kddesa')))
        assert response.status_code == 409
        assert response.json() == {'error': 'Data sudah ada'}

    def test_not_null_violation(self):
        response = call(failing_view(IntegrityError('NOT NULL constraint failed: penduduk.nmkecamatan')))
        assert response.status_code == 400
        assert response.json() == {'error': 'Data tidak lengkap atau tidak valid'}

    def test_foreign_key_violation(self):
        response = call(failing_view(IntegrityError('FOREIGN KEY constraint failed')))
        assert response.status_code == 409
        assert response.json() == {'error': 'Tidak dapat menghapus data karena masih digunakan'}

    def test_unexpected_error_is_hidden_from_client(self, caplog, monkeypatch):
        # the apps logger does not propagate to the root handler caplog listens on
        monkeypatch.setattr(logging.getLogger('apps'), 'propagate', True)
        with caplog.at_level(logging.ERROR, logger='apps.core.decorators'):
            response = call(failing_view(RuntimeError('kolom rahasia')))
        assert response.status_code == 500
        assert response.json() == {'error': 'Terjadi kesalahan pada server'}
        assert 'kolom rahasia' not in response.content.decode()
        assert 'kolom rahasia' in caplog.text

    def test_wrong_method(self):
        request = RequestFactory().get('/api/test', HTTP_X_API_KEY='test-key')
        assert failing_view(RuntimeError())(request).status_code == 405

    def test_invalid_json_body(self, api):
        response = api.post('/api/ref-kecamatan', 'bukan json', content_type='application/json')
        assert response.status_code == 400
        assert response.json() == {'error': 'Body JSON tidak valid'}
