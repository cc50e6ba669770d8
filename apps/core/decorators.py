import logging
from functools import wraps

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.http import Http404, HttpResponseNotAllowed
from django.views.decorators.csrf import csrf_exempt

from .auth import API_KEY, authenticate
from .errors import ApiError
from .serialization import api_response

logger = logging.getLogger(__name__)


UNIQUE_MARKERS = ('unique', 'duplicate entry')
MYSQL_DUPLICATE_ENTRY = 1062


def integrity_error(exc):
    """(status, message) for an IntegrityError: 409 for unique violations, 400 otherwise"""
    text = str(exc).lower()
    if 'foreign key' in text:
        return 409, 'Tidak dapat menghapus data karena masih digunakan'
    code = exc.args[0] if exc.args else None
    if code == MYSQL_DUPLICATE_ENTRY or any(marker in text for marker in UNIQUE_MARKERS):
        return 409, 'Data sudah ada'
    return 400, 'Data tidak lengkap atau tidak valid'


def api_view(methods, auth=API_KEY):
    """Wrap a JSON endpoint: method check, authentication and error-to-status mapping.

    auth is API_KEY (key or token), JWT (token only) or None for public endpoints.
    """
    methods = [method.upper() for method in methods]

    def decorator(view):
        @csrf_exempt
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in methods:
                return HttpResponseNotAllowed(methods)

            where = f"{request.method} {request.path}"
            try:
                request.auth_claims = authenticate(request, auth) if auth else {}
                with transaction.atomic():
                    return view(request, *args, **kwargs)
            except ApiError as e:
                logger.warning(f"{where} -> {e.status}: {e.message}")
                return api_response(e.as_dict(), status=e.status)
            except ValidationError as e:
                logger.warning(f"{where} -> 400: {e.messages}")
                return api_response({'error': '; '.join(e.messages)}, status=400)
            except (ObjectDoesNotExist, Http404):
                return api_response({'error': 'Data tidak ditemukan'}, status=404)
            except IntegrityError as e:
                status, message = integrity_error(e)
                logger.warning(f"{where} -> {status}: {e}")
                return api_response({'error': message}, status=status)
            except DatabaseError:
                logger.exception(f"Database error on {where}")
                return api_response({'error': 'Database error'}, status=500)
            except Exception:
                logger.exception(f"Unhandled error on {where}")
                return api_response({'error': 'Terjadi kesalahan pada server'}, status=500)

        return wrapper

    return decorator
