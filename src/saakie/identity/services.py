"""Identity sync service layer.

Upserts are keyed by the identity provider id, so replaying the same event
converges on the same directory record.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_NAME = "User"


class IdentitySyncError(Exception):
    """The event could not be applied to the directory."""


class InvalidPayload(IdentitySyncError):
    """The event is missing data required to mirror the account."""


def _primary(entries, primary_id, key):
    """Pick the primary entry's value from a provider list, else the first."""
    entries = [entry for entry in entries or [] if isinstance(entry, dict)]
    for entry in entries:
        if primary_id and entry.get("id") == primary_id:
            return entry.get(key)
    return entries[0].get(key) if entries else None


def extract_profile(data: dict) -> dict:
    """Map a provider user payload onto directory fields.

    Raises:
        InvalidPayload: If the payload has no user id or email address
    """
    clerk_id = data.get("id")
    email = _primary(data.get("email_addresses"), data.get("primary_email_address_id"), "email_address")
    phone = _primary(data.get("phone_numbers"), data.get("primary_phone_number_id"), "phone_number")
    name = f"{data.get('first_name') or ''} {data.get('last_name') or ''}".strip() or DEFAULT_NAME

    if not clerk_id or not email:
        raise InvalidPayload("Missing required fields: clerkId or email")

    return {
        "clerk_id": clerk_id,
        "email": email,
        "name": name,
        "phone": phone or None,
    }


@transaction.atomic
def sync_user(data: dict):
    """Create or update the directory record for a provider user.

    New records take the model defaults (CUSTOMER, ACTIVE); existing records
    keep their role and status.

    Returns:
        (user, created)

    Raises:
        InvalidPayload: If the payload has no user id or email address
    """
    profile = extract_profile(data)
    user, created = User.objects.update_or_create(
        clerk_id=profile["clerk_id"],
        defaults={
            "email": profile["email"],
            "name": profile["name"],
            "phone": profile["phone"],
        },
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])

    logger.info(
        f"User {'created' if created else 'updated'} from identity provider: "
        f"{user.pk} (clerk_id={user.clerk_id}, role={user.role}, status={user.status})"
    )
    return user, created


def remove_user(clerk_id):
    """Delete the directory record for a provider user.

    Raises:
        IdentitySyncError: If no record matches the provider id
    """
    deleted, _ = User.objects.filter(clerk_id=clerk_id).delete() if clerk_id else (0, {})
    if not deleted:
        raise IdentitySyncError(f"No directory user for clerk_id={clerk_id}")
    logger.info(f"User deleted from identity provider: clerk_id={clerk_id}")
