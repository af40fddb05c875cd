"""User directory service layer.

CRUD over user accounts for the admin console. Views call these functions
instead of manipulating models directly. Expected failures are raised as
DirectoryError subclasses before anything is written.

Order aggregates (order count, total spent) are computed per query, never
stored on the account.
"""

import logging
import math
import uuid
from decimal import Decimal
from typing import NamedTuple

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.db.models import Count, DecimalField, Prefetch, Q, Sum, Value
from django.db.models.functions import Coalesce

from saakie.core.models import UserRole, UserStatus
from saakie.store.models import Order

from .exceptions import BadRequest, Conflict, NotFound, ValidationError

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
ALL = "all"


class UserPage(NamedTuple):
    """One page of directory results."""

    users: list
    page: int
    limit: int
    total: int
    total_pages: int


def with_order_totals(queryset):
    """Annotate accounts with order_count and total_spent."""
    return queryset.annotate(
        order_count=Count("orders"),
        total_spent=Coalesce(
            Sum("orders__total_amount"),
            Value(Decimal("0")),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        ),
    )


def _positive_int(value, default, field, maximum=None):
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{field} must be a positive integer")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}")
    return number


def _text(value):
    return str(value).strip() if value is not None else ""


def _parse_id(user_id):
    try:
        return uuid.UUID(str(user_id))
    except ValueError:
        raise NotFound("User not found")


def _clean_email(email):
    email = _text(email)
    try:
        validate_email(email)
    except DjangoValidationError:
        raise ValidationError("Invalid email address")
    return User.objects.normalize_email(email)


def _check_choice(value, choices, field):
    if value not in choices.values:
        raise ValidationError(f"Invalid {field}: {value}")
    return value


def list_users(page=None, limit=None, search=None, role=None, status=None) -> UserPage:
    """List accounts newest first, filtered and paginated.

    Args:
        page: 1-based page number (default 1)
        limit: Page size (default 10, at most 100)
        search: Case-insensitive substring of name or email
        role: Exact role, or "all"/None for any
        status: Exact status, or "all"/None for any

    Raises:
        ValidationError: If page or limit is not a positive integer, or limit
            exceeds MAX_LIMIT
    """
    page = _positive_int(page, DEFAULT_PAGE, "page")
    limit = _positive_int(limit, DEFAULT_LIMIT, "limit", maximum=MAX_LIMIT)

    queryset = User.objects.all()

    search = (search or "").strip()
    if search:
        queryset = queryset.filter(Q(name__icontains=search) | Q(email__icontains=search))

    if role and role != ALL:
        queryset = queryset.filter(role=role)

    if status and status != ALL:
        queryset = queryset.filter(status=status)

    total = queryset.count()
    offset = (page - 1) * limit
    if offset >= total:
        users = []
    else:
        users = list(with_order_totals(queryset).order_by("-created_at")[offset:offset + limit])

    return UserPage(
        users=users,
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )


def get_user(user_id):
    """Return one account with its orders and addresses loaded.

    Raises:
        NotFound: If no account has this id
    """
    queryset = with_order_totals(User.objects.filter(pk=_parse_id(user_id))).prefetch_related(
        Prefetch(
            "orders",
            queryset=Order.objects.only("id", "user", "total_amount", "status", "created_at"),
        ),
        "addresses",
    )
    user = queryset.first()
    if user is None:
        raise NotFound("User not found")
    return user


def create_user(data: dict):
    """Create a directory-only account.

    The account gets a placeholder identity provider id, so it cannot sign in
    until it is provisioned with the provider.

    Raises:
        ValidationError: If name or email is missing, or role/status is invalid
        Conflict: If the email is already registered
    """
    name = _text(data.get("name"))
    email = _text(data.get("email"))
    if not name or not email:
        raise ValidationError("Name and email are required")

    email = _clean_email(email)
    role = _check_choice(data.get("role") or UserRole.CUSTOMER, UserRole, "role")
    status = _check_choice(data.get("status") or UserStatus.ACTIVE, UserStatus, "status")

    if User.objects.filter(email=email).exists():
        raise Conflict("User with this email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                name=name,
                phone=_text(data.get("phone")) or None,
                role=role,
                status=status,
                clerk_id=f"temp_{uuid.uuid4().hex}",
            )
    except IntegrityError:
        # Concurrent create with the same email won the insert
        raise Conflict("User with this email already exists")

    logger.info(f"Created directory user {user.pk} ({email})")
    return with_order_totals(User.objects.filter(pk=user.pk)).get()


def update_user(user_id, data: dict):
    """Apply a partial update. Keys absent from data are left untouched.

    Raises:
        NotFound: If no account has this id
        ValidationError: If a provided value is empty or invalid
        Conflict: If the new email belongs to a different account
    """
    user = User.objects.filter(pk=_parse_id(user_id)).first()
    if user is None:
        raise NotFound("User not found")

    changes = {}
    if "name" in data:
        name = _text(data["name"])
        if not name:
            raise ValidationError("Name cannot be empty")
        changes["name"] = name

    if "email" in data:
        if not _text(data["email"]):
            raise ValidationError("Email cannot be empty")
        email = _clean_email(data["email"])
        if email != user.email:
            if User.objects.filter(email=email).exclude(pk=user.pk).exists():
                raise Conflict("Email already taken")
            changes["email"] = email

    if "phone" in data:
        changes["phone"] = _text(data["phone"]) or None

    if "role" in data:
        changes["role"] = _check_choice(data["role"], UserRole, "role")

    if "status" in data:
        changes["status"] = _check_choice(data["status"], UserStatus, "status")

    if changes:
        for field, value in changes.items():
            setattr(user, field, value)
        try:
            with transaction.atomic():
                user.save(update_fields=[*changes, "updated_at"])
        except IntegrityError:
            raise Conflict("Email already taken")
        logger.info(f"Updated directory user {user.pk}: {sorted(changes)}")

    return with_order_totals(User.objects.filter(pk=user.pk)).get()


def delete_user(user_id, acting_identity_id):
    """Delete an account together with its addresses and orders.

    Raises:
        NotFound: If no account has this id
        BadRequest: If the account belongs to the acting admin
    """
    user = User.objects.filter(pk=_parse_id(user_id)).first()
    if user is None:
        raise NotFound("User not found")

    if user.clerk_id == acting_identity_id:
        raise BadRequest("Cannot delete your own account")

    user_pk = user.pk
    user.delete()
    logger.info(f"Deleted directory user {user_pk}")
    return user_pk
