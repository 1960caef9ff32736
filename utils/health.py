"""
Health check view for container orchestration and load balancer monitoring
"""

import logging

from django.db import DatabaseError, connection
from django.http import HttpResponse
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)


@csrf_exempt
@never_cache
def health_check(request):
    """
    Return 200 "OK" when the database answers, 503 otherwise.

    Share links are useless without the card store, so a dead database
    should take the instance out of rotation.
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return HttpResponse("Database unavailable", content_type="text/plain", status=503)

    if request.method == "HEAD":
        return HttpResponse("", content_type="text/plain", status=200)
    return HttpResponse("OK", content_type="text/plain", status=200)
