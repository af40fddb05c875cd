"""Webhook endpoint for identity provider lifecycle events.

POST /webhooks/identity/
Headers: svix-id, svix-timestamp, svix-signature

Authenticated by signature only; no session is involved. Non-2xx responses
leave redelivery to the provider's retry policy.
"""

import logging

from django.core.exceptions import ImproperlyConfigured
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from . import services, verification

logger = logging.getLogger(__name__)

UPSERT_EVENTS = ("user.created", "user.updated")
DELETE_EVENT = "user.deleted"


@method_decorator(csrf_exempt, name="dispatch")
class IdentityWebhookView(View):
    """Mirror identity provider user events into the directory."""

    def post(self, request):
        headers = verification.get_signature_headers(request)
        if headers is None:
            return JsonResponse({"error": "Error occurred -- no svix headers"}, status=400)

        try:
            event = verification.verify(request.body, headers)
        except ImproperlyConfigured as e:
            logger.error(f"Identity webhook rejected: {e}")
            return JsonResponse({"error": "Webhook secret not configured"}, status=500)
        except verification.SignatureError as e:
            logger.warning(f"Error verifying identity webhook: {e}")
            return JsonResponse({"error": "Error occurred"}, status=400)

        if event.type in UPSERT_EVENTS:
            return self.handle_upsert(event)
        if event.type == DELETE_EVENT:
            return self.handle_delete(event)

        logger.debug(f"Ignoring identity event {event.type}")
        return JsonResponse({"received": True})

    def handle_upsert(self, event):
        try:
            user, created = services.sync_user(event.data)
        except services.InvalidPayload as e:
            logger.error(f"Invalid {event.type} payload: {e}")
            return JsonResponse({"error": str(e)}, status=400)
        except Exception as e:
            logger.exception(f"Error syncing user for {event.type}")
            return JsonResponse({"error": "Error syncing user", "details": str(e)}, status=500)

        return JsonResponse({
            "success": True,
            "message": f"User {'created' if created else 'updated'} successfully",
            "userId": str(user.pk),
        })

    def handle_delete(self, event):
        try:
            services.remove_user(event.data.get("id"))
        except services.IdentitySyncError as e:
            logger.error(f"Error deleting user: {e}")
            return JsonResponse({"error": "Error deleting user"}, status=500)
        except Exception:
            logger.exception("Error deleting user")
            return JsonResponse({"error": "Error deleting user"}, status=500)

        return JsonResponse({"received": True})
