"""Identity provider webhook URL patterns."""

from django.urls import re_path

from . import views

app_name = "identity"

urlpatterns = [
    # Deliveries do not follow redirects, so the slashless form must resolve too
    re_path(r"^identity/?$", views.IdentityWebhookView.as_view(), name="webhook"),
]
