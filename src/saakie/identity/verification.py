"""Signature verification for identity provider webhooks.

Notifications are signed with the Svix scheme: an id, a timestamp and a
signature header, checked against the shared signing secret.
"""

import json
from dataclasses import dataclass, field

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from svix.webhooks import Webhook, WebhookVerificationError

SIGNATURE_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")


class SignatureError(Exception):
    """The notification could not be authenticated."""


@dataclass
class VerifiedEvent:
    type: str
    data: dict = field(default_factory=dict)


def get_webhook_secret():
    secret = settings.IDENTITY_PROVIDER.get("WEBHOOK_SECRET")
    if not secret:
        raise ImproperlyConfigured("IDENTITY_PROVIDER['WEBHOOK_SECRET'] is not set")
    return secret


def get_signature_headers(request):
    """Return the three signature headers, or None if any is missing."""
    headers = {name: request.headers.get(name) for name in SIGNATURE_HEADERS}
    if not all(headers.values()):
        return None
    return headers


def verify(raw_body, headers, secret=None) -> VerifiedEvent:
    """Verify a notification body against its signature headers.

    Raises:
        ImproperlyConfigured: If no signing secret is configured
        SignatureError: If the signature or payload is invalid
    """
    webhook = Webhook(secret or get_webhook_secret())
    try:
        webhook.verify(raw_body, headers)
    except (WebhookVerificationError, ValueError) as e:
        raise SignatureError(str(e)) from e

    # verify() only authenticates; the event is decoded from the raw body
    try:
        payload = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SignatureError(f"Invalid JSON payload: {e}") from e

    if not isinstance(payload, dict) or not payload.get("type"):
        raise SignatureError("Payload is not an event")
    data = payload.get("data")
    return VerifiedEvent(type=payload["type"], data=data if isinstance(data, dict) else {})
