"""Profile views for the signed-in customer."""

from django.contrib.auth import get_user_model
from django.http import JsonResponse
from django.views import View

from saakie.core.http import isoformat
from saakie.core.mixins import IdentityRequiredMixin
from saakie.store.models import Order
from saakie.store.serializers import serialize_address, serialize_order

User = get_user_model()

RECENT_ORDER_COUNT = 5


class ProfileMixin(IdentityRequiredMixin):
    """Resolve the caller's directory record from their identity."""

    def get_account(self):
        return User.objects.filter(clerk_id=self.request.identity_id).first()

    def account_missing(self):
        return JsonResponse({"error": "Profile not found"}, status=404)


class ProfileView(ProfileMixin, View):
    """Account details, recent orders and saved addresses.

    GET /profile/
    """

    def get(self, request):
        user = self.get_account()
        if user is None:
            return self.account_missing()

        recent_orders = Order.objects.filter(user=user).order_by("-created_at")[:RECENT_ORDER_COUNT]

        return JsonResponse({
            "user": {
                "id": str(user.pk),
                "name": user.get_display_name(),
                "email": user.email,
                "phone": user.phone,
                "role": user.role,
                "status": user.status,
                "createdAt": isoformat(user.created_at),
            },
            "recentOrders": [serialize_order(order) for order in recent_orders],
            "addresses": [serialize_address(address) for address in user.addresses.all()],
        })


class ProfileOrdersView(ProfileMixin, View):
    """Full order history, newest first.

    GET /profile/orders/
    """

    def get(self, request):
        user = self.get_account()
        if user is None:
            return self.account_missing()

        orders = (
            Order.objects.filter(user=user)
            .select_related("shipping_address")
            .prefetch_related("items")
            .order_by("-created_at")
        )
        return JsonResponse({
            "orders": [serialize_order(order, include_items=True) for order in orders],
        })
