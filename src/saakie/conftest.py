"""Shared pytest fixtures for Saakie tests."""

from decimal import Decimal

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import Client
from jose import jwt

from saakie.core.models import UserRole


User = get_user_model()


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def make_token():
    """Build identity provider session tokens signed with the test key."""

    def _make_token(clerk_id, **claims):
        config = settings.IDENTITY_PROVIDER
        return jwt.encode(
            {"sub": clerk_id, **claims},
            config["JWT_KEY"],
            algorithm=config["JWT_ALGORITHMS"][0],
        )

    return _make_token


@pytest.fixture
def auth_header(make_token):
    """Return request headers authenticating as the given user."""

    def _auth_header(user):
        return {"Authorization": f"Bearer {make_token(user.clerk_id)}"}

    return _auth_header


@pytest.fixture
def admin_user(db):
    """Create a directory admin."""
    return User.objects.create_user(
        email="admin@saakie.in",
        name="Asha Admin",
        clerk_id="user_admin",
        role=UserRole.ADMIN,
    )


@pytest.fixture
def customer_user(db):
    """Create a regular customer."""
    return User.objects.create_user(
        email="priya.sharma@example.com",
        name="Priya Sharma",
        clerk_id="user_priya",
        phone="+919800000001",
    )


@pytest.fixture
def category(db):
    """Create a product category."""
    from saakie.store.models import Category

    return Category.objects.create(name="Silk Sarees", slug="silk-sarees", sort_order=1)


@pytest.fixture
def product(db, category):
    """Create an in-stock product."""
    from saakie.store.models import Product

    return Product.objects.create(
        name="Kanjeevaram Silk Saree",
        description="Handwoven pure silk with zari border",
        price=Decimal("4999.00"),
        category=category,
        stock=10,
    )


@pytest.fixture
def make_order(db):
    """Create orders with a given total for a user."""
    from saakie.store.models import Order

    def _make_order(user, total, **extra):
        return Order.objects.create(user=user, total_amount=Decimal(str(total)), **extra)

    return _make_order
