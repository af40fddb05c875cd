"""Core mixins for view access control."""

import logging

from django.http import JsonResponse

from .models import User, UserRole

logger = logging.getLogger(__name__)


class IdentityRequiredMixin:
    """Require a verified identity provider session on every request."""

    def dispatch(self, request, *args, **kwargs):
        if not getattr(request, "identity_id", None):
            return JsonResponse({"error": "Unauthorized"}, status=401)
        return super().dispatch(request, *args, **kwargs)


class RoleRequiredMixin(IdentityRequiredMixin):
    """Require the caller's directory record to hold required_role.

    The record is fetched on every dispatch so a role change applies to the
    very next request. The record is exposed as request.directory_user.
    """

    required_role = UserRole.ADMIN

    def dispatch(self, request, *args, **kwargs):
        identity_id = getattr(request, "identity_id", None)
        if not identity_id:
            return JsonResponse({"error": "Unauthorized"}, status=401)

        current_user = User.objects.filter(clerk_id=identity_id).first()
        if current_user is None or current_user.role != self.required_role:
            logger.info(f"Denied {request.method} {request.path} to {identity_id}")
            return JsonResponse({"error": "Forbidden"}, status=403)

        request.directory_user = current_user
        return super().dispatch(request, *args, **kwargs)


class AdminRequiredMixin(RoleRequiredMixin):
    required_role = UserRole.ADMIN
