"""URL configuration for Saakie project."""

from django.contrib import admin
from django.urls import include, path

from saakie.core.views import health_check

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Django admin
    path("admin/", admin.site.urls),

    # Catalog and cart
    path("shop/", include("saakie.store.urls", namespace="store")),

    # Signed-in customer profile
    path("profile/", include("saakie.profile.urls", namespace="profile")),

    # Admin user directory
    path("directory/", include("saakie.directory.urls", namespace="directory")),

    # Identity provider lifecycle events
    path("webhooks/", include("saakie.identity.urls", namespace="identity")),
]
