import pytest

from apps.accounts.models import Admin, LockStatus
from apps.accounts.services import PasswordService
from apps.core.errors import BadRequest
from apps.regions.models import Opd


@pytest.fixture
def operator(db):
    return Admin.objects.create(
        username='operator',
        nmpengguna='Operator Dinas',
        password=PasswordService.hash('rahasia123'),
        kdopd='101',
        level='OPERATOR',
    )


class TestPasswordService:
    def test_hash_and_check(self):
        hashed = PasswordService.hash('rahasia123')
        assert hashed.startswith('$2b$')
        assert PasswordService.check('rahasia123', hashed)
        assert not PasswordService.check('salah', hashed)

    def test_php_prefix_is_accepted(self):
        hashed = PasswordService.hash('rahasia123')
        assert PasswordService.check('rahasia123', '$2y$' + hashed[4:])

    def test_plain_text_never_matches(self):
        assert not PasswordService.check('rahasia123', 'rahasia123')

    def test_length_limits(self):
        with pytest.raises(BadRequest):
            PasswordService.validate('short')
        with pytest.raises(BadRequest):
            PasswordService.validate('x' * 73)

    def test_length_counts_utf8_bytes(self):
        assert PasswordService.validate('é' * 36) == 'é' * 36
        with pytest.raises(BadRequest):
            PasswordService.validate('é' * 40)


@pytest.mark.django_db
class TestAdminAccounts:
    def test_register_hides_password(self, api):
        response = api.post(
            '/api/login',
            {'username': 'andi', 'password': 'rahasia123', 'nmpengguna': 'Andi', 'level': 'admin'},
            content_type='application/json',
        )
        assert response.status_code == 201
        data = response.json()
        assert 'password' not in data
        assert data['level'] == 'ADMIN'
        assert data['lockuser'] == 'AKTIF'
        assert Admin.objects.get(username='andi').password.startswith('$2b$')

    def test_register_duplicate_lists_fields(self, api, operator):
        response = api.post(
            '/api/login',
            {'username': 'operator', 'password': 'rahasia123', 'nmpengguna': 'X'},
            content_type='application/json',
        )
        assert response.status_code == 409
        assert response.json() == {'error': 'Duplicate', 'fields': {'username': 'Username sudah digunakan'}}

    def test_register_rejects_multibyte_password_over_limit(self, api):
        response = api.post(
            '/api/login',
            {'username': 'budi', 'password': 'é' * 40, 'nmpengguna': 'Budi'},
            content_type='application/json',
        )
        assert response.status_code == 400
        assert not Admin.objects.filter(username='budi').exists()

    def test_invalid_level(self, api):
        response = api.post(
            '/api/login',
            {'username': 'andi', 'password': 'rahasia123', 'nmpengguna': 'Andi', 'level': 'ROOT'},
            content_type='application/json',
        )
        assert response.status_code == 400

    def test_list_resolves_opd_name(self, api, operator):
        Opd.objects.create(kdopd=101, nmopd='Dinas Kesehatan')
        rows = api.get('/api/login').json()
        assert rows[0]['nmopd'] == 'Dinas Kesehatan'
        assert 'password' not in rows[0]

    def test_update_rehashes_password(self, api, operator):
        response = api.put(f'/api/login/{operator.id}', {'password': 'baru12345'}, content_type='application/json')
        assert response.status_code == 200
        operator.refresh_from_db()
        assert PasswordService.check('baru12345', operator.password)

    def test_empty_update(self, api, operator):
        response = api.put(f'/api/login/{operator.id}', {'password': ''}, content_type='application/json')
        assert response.status_code == 400
        assert response.json()['error'] == 'Tidak ada field untuk diupdate'

    def test_delete(self, api, operator):
        assert api.delete(f'/api/login/{operator.id}').json() == {'ok': True}


@pytest.mark.django_db
class TestSession:
    def test_login_sets_cookie_and_me_reads_it(self, anonymous, operator):
        response = anonymous.post(
            '/api/auth/login', {'username': 'operator', 'password': 'rahasia123'}, content_type='application/json'
        )
        assert response.status_code == 200
        data = response.json()
        assert data['tokenType'] == 'Bearer'
        assert data['user']['username'] == 'operator'
        assert response.cookies['token']['httponly']

        me = anonymous.get('/api/me').json()
        assert me['user'] == {'id': str(operator.id), 'username': 'operator', 'level': 'OPERATOR', 'kdopd': '101'}

    def test_bearer_header(self, anonymous, operator):
        token = anonymous.post(
            '/api/auth/login', {'username': 'operator', 'password': 'rahasia123'}, content_type='application/json'
        ).json()['accessToken']
        response = anonymous.get('/api/me', headers={'Authorization': f'Bearer {token}'})
        assert response.status_code == 200

    def test_wrong_password(self, anonymous, operator):
        response = anonymous.post(
            '/api/auth/login', {'username': 'operator', 'password': 'salah12345'}, content_type='application/json'
        )
        assert response.status_code == 401
        assert response.json() == {'error': 'Username atau password salah'}

    def test_locked_account(self, anonymous, operator):
        operator.lockuser = LockStatus.NONAKTIF
        operator.save()
        response = anonymous.post(
            '/api/auth/login', {'username': 'operator', 'password': 'rahasia123'}, content_type='application/json'
        )
        assert response.status_code == 401
        assert response.json() == {'error': 'Akun dinonaktifkan'}

    def test_me_requires_token(self, api):
        # an API key is not a session
        assert api.get('/api/me').status_code == 401

    def test_logout_clears_cookie(self, anonymous):
        response = anonymous.post('/api/auth/logout')
        assert response.status_code == 200
        assert response.cookies['token'].value == ''
