"""Admin API views for the user directory.

GET    /directory/users/?page&limit&search&role&status
POST   /directory/users/
GET    /directory/users/<user_id>/
PUT    /directory/users/<user_id>/
DELETE /directory/users/<user_id>/

Every request re-checks that the caller's directory record has the ADMIN role.
"""

import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from saakie.core.http import isoformat, money, read_json
from saakie.core.mixins import AdminRequiredMixin
from saakie.store.serializers import serialize_address, serialize_order_summary

from . import services
from .exceptions import DirectoryError

logger = logging.getLogger(__name__)


def serialize_user(user):
    return {
        "id": str(user.pk),
        "clerkId": user.clerk_id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "status": user.status,
        "createdAt": isoformat(user.created_at),
        "updatedAt": isoformat(user.updated_at),
        "orderCount": user.order_count,
        "totalSpent": money(user.total_spent),
    }


@method_decorator(csrf_exempt, name="dispatch")
class DirectoryAPIView(AdminRequiredMixin, View):
    """Base view turning directory failures into JSON error responses."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except DirectoryError as e:
            return JsonResponse({"error": e.message}, status=e.status_code)
        except Exception:
            logger.exception(f"Directory request failed: {request.method} {request.path}")
            return JsonResponse({"error": "Internal server error"}, status=500)


class UserListView(DirectoryAPIView):
    """List and create directory users."""

    def get(self, request):
        params = request.GET
        result = services.list_users(
            page=params.get("page"),
            limit=params.get("limit"),
            search=params.get("search"),
            role=params.get("role"),
            status=params.get("status"),
        )
        return JsonResponse({
            "users": [serialize_user(user) for user in result.users],
            "pagination": {
                "page": result.page,
                "limit": result.limit,
                "total": result.total,
                "totalPages": result.total_pages,
            },
        })

    def post(self, request):
        data, error = read_json(request)
        if error:
            return error

        user = services.create_user(data)
        return JsonResponse(
            {"message": "User created successfully", "user": serialize_user(user)},
            status=201,
        )


class UserDetailView(DirectoryAPIView):
    """Read, update and delete one directory user."""

    def get(self, request, user_id):
        user = services.get_user(user_id)
        data = serialize_user(user)
        data["orders"] = [serialize_order_summary(order) for order in user.orders.all()]
        data["addresses"] = [serialize_address(address) for address in user.addresses.all()]
        return JsonResponse(data)

    def put(self, request, user_id):
        data, error = read_json(request)
        if error:
            return error

        user = services.update_user(user_id, data)
        return JsonResponse({"message": "User updated successfully", "user": serialize_user(user)})

    def delete(self, request, user_id):
        services.delete_user(user_id, acting_identity_id=request.identity_id)
        return JsonResponse({"message": "User deleted successfully"})
