import logging

from django.conf import settings
from django.shortcuts import get_object_or_404

from apps.core.auth import JWT
from apps.core.decorators import api_view
from apps.core.errors import BadRequest, Conflict
from apps.core.http import read_json
from apps.core.parsing import Coerce, path_id
from apps.core.serialization import api_response
from apps.regions.models import Opd
from .models import Admin, Level, LockStatus
from .services import PasswordService, SessionService

logger = logging.getLogger(__name__)

TEXT_FIELDS = {'nipid': 30, 'nmpengguna': 100, 'username': 50, 'kdopd': 20, 'nmopd': 255}


def parse_choice(value, choices, field):
    if value is None:
        return None
    choice = str(value).strip().upper()
    if choice not in choices.values:
        raise BadRequest(f"{field} tidak valid. Gunakan: {' | '.join(choices.values)}")
    return choice


def duplicate_fields(username=None, nipid=None, exclude_id=None):
    admins = Admin.objects.exclude(id=exclude_id) if exclude_id else Admin.objects.all()
    fields = {}
    if username and admins.filter(username=username).exists():
        fields['username'] = 'Username sudah digunakan'
    if nipid and admins.filter(nipid=nipid).exists():
        fields['nipid'] = 'NIP/NIPID sudah digunakan'
    return fields


@api_view(['GET', 'POST'])
def admin_collection(request):
    if request.method == 'POST':
        body = read_json(request)
        values = {field: Coerce.to_str(body.get(field), max_length=size, field=field) for field, size in TEXT_FIELDS.items()}
        if not values['username'] or not body.get('password') or not values['nmpengguna']:
            raise BadRequest('username, password, dan nmpengguna wajib diisi')

        duplicates = duplicate_fields(values['username'], values['nipid'])
        if duplicates:
            raise Conflict('Duplicate', fields=duplicates)

        admin = Admin.objects.create(
            **values,
            password=PasswordService.hash(PasswordService.validate(body['password'])),
            level=parse_choice(body.get('level'), Level, 'level'),
            lockuser=parse_choice(body.get('lockuser'), LockStatus, 'lockuser') or LockStatus.AKTIF,
        )
        logger.info(f"Registered admin {admin.username}")
        return api_response(SessionService.public_user(admin), status=201)

    opd_names = dict(Opd.objects.values_list('kdopd', 'nmopd'))
    rows = []
    for admin in Admin.objects.order_by('-datecreate'):
        row = SessionService.public_user(admin)
        row['nmopd'] = opd_names.get(Coerce.to_int(admin.kdopd)) or admin.nmopd
        rows.append(row)
    return api_response(rows)


@api_view(['GET', 'PUT', 'DELETE'])
def admin_detail(request, id):
    admin = get_object_or_404(Admin, id=path_id(id))

    if request.method == 'DELETE':
        admin.delete()
        logger.info(f"Deleted admin {admin.username}")
        return api_response({'ok': True})

    if request.method == 'PUT':
        body = read_json(request)
        data = {}
        for field, size in TEXT_FIELDS.items():
            value = Coerce.to_str(body.get(field), max_length=size, field=field)
            if value is not None:
                data[field] = value
        level = parse_choice(body.get('level'), Level, 'level')
        if level:
            data['level'] = level
        lockuser = parse_choice(body.get('lockuser'), LockStatus, 'lockuser')
        if lockuser:
            data['lockuser'] = lockuser
        # An empty password leaves the stored hash untouched
        if Coerce.to_str(body.get('password')):
            data['password'] = PasswordService.hash(PasswordService.validate(body['password']))

        if not data:
            raise BadRequest('Tidak ada field untuk diupdate')

        duplicates = duplicate_fields(data.get('username'), data.get('nipid'), exclude_id=admin.id)
        if duplicates:
            raise Conflict('Duplicate', fields=duplicates)

        for field, value in data.items():
            setattr(admin, field, value)
        admin.save(update_fields=list(data))

    return api_response(SessionService.public_user(admin))


@api_view(['POST'], auth=None)
def login(request):
    body = read_json(request)
    username = Coerce.to_str(body.get('username'))
    password = body.get('password')
    if not username or not isinstance(password, str) or not password:
        raise BadRequest('username dan password wajib diisi')

    admin, token = SessionService.login(username, password)
    response = api_response({
        'accessToken': token,
        'tokenType': 'Bearer',
        'expiresIn': settings.JWT_EXPIRES_SECONDS,
        'user': SessionService.public_user(admin),
    })
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRES_SECONDS,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite='Lax',
    )
    return response


@api_view(['POST'], auth=None)
def logout(request):
    response = api_response({'ok': True})
    response.delete_cookie(settings.AUTH_COOKIE_NAME, samesite='Lax')
    return response


@api_view(['GET'], auth=JWT)
def me(request):
    claims = request.auth_claims
    return api_response({
        'user': {
            'id': claims.get('sub'),
            'username': claims.get('username'),
            'level': claims.get('level'),
            'kdopd': claims.get('kdopd'),
        },
        'exp': claims.get('exp'),
    })
