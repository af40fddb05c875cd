"""Tests for the user directory service layer."""

import math
from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from saakie.core.models import UserRole, UserStatus
from saakie.directory import services
from saakie.directory.exceptions import BadRequest, Conflict, NotFound, ValidationError
from saakie.store.models import Address, Order

User = get_user_model()


@pytest.fixture
def directory(db):
    """Create accounts with pinned creation times, oldest first."""
    rows = [
        ("Priya Sharma", "priya.sharma@example.com", UserRole.CUSTOMER, UserStatus.ACTIVE),
        ("Ravi Kumar", "ravi@example.com", UserRole.MANAGER, UserStatus.ACTIVE),
        ("Anita Desai", "PRIYA.fan@example.com", UserRole.CUSTOMER, UserStatus.SUSPENDED),
        ("Meera Iyer", "meera@example.com", UserRole.ADMIN, UserStatus.INACTIVE),
        ("priyanka Rao", "rao@example.com", UserRole.CUSTOMER, UserStatus.ACTIVE),
    ]
    now = timezone.now()
    users = []
    for index, (name, email, role, status) in enumerate(rows):
        user = User.objects.create_user(email=email, name=name, role=role, status=status)
        User.objects.filter(pk=user.pk).update(created_at=now - timedelta(minutes=len(rows) - index))
        users.append(user)
    return users


class TestListUsers:
    def test_defaults_and_newest_first(self, directory):
        result = services.list_users()

        assert result.page == 1
        assert result.limit == 10
        assert result.total == 5
        assert [u.name for u in result.users] == [
            "priyanka Rao",
            "Meera Iyer",
            "Anita Desai",
            "Ravi Kumar",
            "Priya Sharma",
        ]

    def test_search_matches_name_or_email_case_insensitively(self, directory):
        result = services.list_users(search="priya")

        assert result.total == 3
        for user in result.users:
            assert "priya" in user.name.lower() or "priya" in user.email.lower()

    def test_all_means_no_filter(self, directory):
        assert services.list_users(role="all", status="all").total == 5

    def test_role_and_status_filters(self, directory):
        assert [u.name for u in services.list_users(role="MANAGER").users] == ["Ravi Kumar"]
        assert [u.name for u in services.list_users(status="SUSPENDED").users] == ["Anita Desai"]
        assert services.list_users(role="CUSTOMER", status="ACTIVE").total == 2

    def test_unknown_role_matches_nothing(self, directory):
        assert services.list_users(role="SUPERHERO").total == 0

    @pytest.mark.parametrize("limit", [1, 2, 3, 4, 5, 7])
    def test_total_pages_is_ceiling(self, directory, limit):
        for page in (1, 2, 3):
            result = services.list_users(page=page, limit=limit)
            assert result.total_pages == math.ceil(5 / limit)

    def test_pages_slice_results(self, directory):
        first = services.list_users(page=1, limit=2)
        third = services.list_users(page=3, limit=2)

        assert [u.name for u in first.users] == ["priyanka Rao", "Meera Iyer"]
        assert [u.name for u in third.users] == ["Priya Sharma"]

    def test_limit_is_capped(self, directory):
        assert services.list_users(limit=services.MAX_LIMIT).limit == 100

        with pytest.raises(ValidationError):
            services.list_users(limit=services.MAX_LIMIT + 1)
        with pytest.raises(ValidationError):
            services.list_users(limit=str(10 ** 30))

    def test_page_past_the_end_is_empty(self, directory):
        result = services.list_users(page=str(10 ** 30), limit=10)

        assert result.users == []
        assert result.total == 5
        assert result.total_pages == 1

    def test_no_matches_gives_zero_pages(self, directory):
        result = services.list_users(search="nobody-here")

        assert result.total == 0
        assert result.total_pages == 0
        assert result.users == []

    @pytest.mark.parametrize("page", ["0", "-1", "abc"])
    def test_invalid_page(self, directory, page):
        with pytest.raises(ValidationError):
            services.list_users(page=page)

    def test_order_aggregates(self, directory, make_order):
        priya = directory[0]
        make_order(priya, "1200.50")
        make_order(priya, "799.50")

        result = services.list_users(search="priya.sharma")

        assert result.users[0].order_count == 2
        assert result.users[0].total_spent == 2000


class TestGetUser:
    def test_includes_orders_addresses_and_totals(self, customer_user, make_order):
        make_order(customer_user, "500")
        Address.objects.create(
            user=customer_user, line1="12 MG Road", city="Bengaluru", state="Karnataka", pincode="560001"
        )

        user = services.get_user(customer_user.pk)

        assert user.order_count == 1
        assert user.total_spent == 500
        assert len(user.orders.all()) == 1
        assert user.addresses.all()[0].city == "Bengaluru"

    def test_unknown_id(self, db):
        with pytest.raises(NotFound):
            services.get_user("3f1c1e62-6a9c-4d59-9d64-0d6a8f4b8e11")

    def test_malformed_id(self, db):
        with pytest.raises(NotFound):
            services.get_user("not-a-uuid")


class TestCreateUser:
    def test_applies_defaults(self, db):
        user = services.create_user({"name": "Kavya", "email": "kavya@example.com"})

        assert user.role == UserRole.CUSTOMER
        assert user.status == UserStatus.ACTIVE
        assert user.clerk_id.startswith("temp_")
        assert user.order_count == 0
        assert not user.has_usable_password()

    def test_keeps_given_role_and_status(self, db):
        user = services.create_user({
            "name": "Kavya",
            "email": "kavya@example.com",
            "phone": "+919811111111",
            "role": "MANAGER",
            "status": "INACTIVE",
        })

        assert user.role == UserRole.MANAGER
        assert user.status == UserStatus.INACTIVE
        assert user.phone == "+919811111111"

    @pytest.mark.parametrize("data", [{"name": "Kavya"}, {"email": "k@example.com"}, {"name": " ", "email": "k@example.com"}])
    def test_requires_name_and_email(self, db, data):
        with pytest.raises(ValidationError):
            services.create_user(data)

    def test_rejects_invalid_role(self, db):
        with pytest.raises(ValidationError):
            services.create_user({"name": "Kavya", "email": "kavya@example.com", "role": "OWNER"})

    def test_duplicate_email_conflicts_without_writing(self, customer_user):
        before = User.objects.count()

        with pytest.raises(Conflict):
            services.create_user({"name": "Someone", "email": customer_user.email})

        assert User.objects.count() == before

    def test_placeholder_ids_are_unique(self, db):
        first = services.create_user({"name": "A", "email": "a@example.com"})
        second = services.create_user({"name": "B", "email": "b@example.com"})

        assert first.clerk_id != second.clerk_id


class TestUpdateUser:
    def test_partial_update_leaves_other_fields(self, customer_user):
        user = services.update_user(customer_user.pk, {"status": "SUSPENDED"})

        assert user.status == UserStatus.SUSPENDED
        assert user.name == "Priya Sharma"
        assert user.email == "priya.sharma@example.com"
        assert user.phone == "+919800000001"

    def test_null_phone_clears_it(self, customer_user):
        user = services.update_user(customer_user.pk, {"phone": None})

        assert user.phone is None

    def test_same_email_is_not_a_conflict(self, customer_user):
        user = services.update_user(customer_user.pk, {"email": customer_user.email, "name": "Priya S"})

        assert user.name == "Priya S"

    def test_email_taken_by_other_account(self, customer_user, admin_user):
        with pytest.raises(Conflict):
            services.update_user(customer_user.pk, {"email": admin_user.email})

        customer_user.refresh_from_db()
        assert customer_user.email == "priya.sharma@example.com"

    def test_empty_name_is_invalid(self, customer_user):
        with pytest.raises(ValidationError):
            services.update_user(customer_user.pk, {"name": ""})

    def test_unknown_user(self, db):
        with pytest.raises(NotFound):
            services.update_user("3f1c1e62-6a9c-4d59-9d64-0d6a8f4b8e11", {"name": "X"})


class TestDeleteUser:
    def test_cascades_orders_and_addresses(self, customer_user, admin_user, make_order):
        make_order(customer_user, "100")
        Address.objects.create(
            user=customer_user, line1="1 Park St", city="Kolkata", state="West Bengal", pincode="700016"
        )

        services.delete_user(customer_user.pk, acting_identity_id=admin_user.clerk_id)

        assert not User.objects.filter(pk=customer_user.pk).exists()
        assert Order.objects.count() == 0
        assert Address.objects.count() == 0

    def test_self_delete_is_refused(self, admin_user):
        before = User.objects.count()

        with pytest.raises(BadRequest):
            services.delete_user(admin_user.pk, acting_identity_id=admin_user.clerk_id)

        assert User.objects.count() == before

    def test_unknown_user(self, admin_user):
        with pytest.raises(NotFound):
            services.delete_user("3f1c1e62-6a9c-4d59-9d64-0d6a8f4b8e11", acting_identity_id=admin_user.clerk_id)
