import logging

from django.conf import settings

from apps.core.decorators import api_view
from apps.core.errors import BadRequest
from apps.core.parsing import Coerce
from apps.core.serialization import api_response
from .queries import BelanjaQuery

logger = logging.getLogger(__name__)


@api_view(['GET'])
def belanja(request):
    tahun = Coerce.to_str(request.GET.get('tahun')) or str(settings.BELANJA_DEFAULT_YEAR)
    if Coerce.to_year(tahun) is None:
        raise BadRequest('tahun tidak valid')

    rows = BelanjaQuery.rows(
        tahun=tahun,
        kd_skpd=Coerce.to_str(request.GET.get('kd_skpd')),
        rek=Coerce.to_str(request.GET.get('rek')),
    )
    logger.debug(f"Belanja {tahun}: {len(rows)} rows")
    return api_response(rows)
