"""Core views for Saakie."""

import logging

from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)

HEALTH_CHECK_KEY = "saakie:health"


def health_check(request):
    """Report database and cache reachability for container orchestration.

    Sessions (and so carts) sit in the cache with the database as backing
    store, so both must answer for the instance to be healthy.
    """
    checks = {}
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        checks["database"] = "connected"

        cache.set(HEALTH_CHECK_KEY, "ok", timeout=10)
        checks["cache"] = "connected" if cache.get(HEALTH_CHECK_KEY) == "ok" else "unavailable"
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({"status": "unhealthy", "error": str(e), **checks}, status=503)

    status = "healthy" if checks["cache"] == "connected" else "degraded"
    return JsonResponse({"status": status, **checks}, status=200 if status == "healthy" else 503)
