"""JSON request/response helpers shared by the API views."""

import json

from django.http import JsonResponse


def read_json(request):
    """Decode a JSON object body.

    Returns (data, None) on success or (None, error_response) when the body is
    not a JSON object. An empty body decodes to an empty dict.
    """
    if not request.body:
        return {}, None
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)
    if not isinstance(data, dict):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)
    return data, None


def isoformat(value):
    return value.isoformat() if value else None


def money(value):
    """Render a Decimal amount as a JSON number."""
    return float(value) if value is not None else 0.0
