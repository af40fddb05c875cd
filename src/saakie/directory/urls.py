"""User directory URL patterns.

Both /users and /users/ resolve, so admin clients never hit an APPEND_SLASH
redirect that would drop a PUT or DELETE body.
"""

from django.urls import re_path

from . import views

app_name = "directory"

urlpatterns = [
    re_path(r"^users/?$", views.UserListView.as_view(), name="user-list"),
    re_path(r"^users/(?P<user_id>[^/]+)/?$", views.UserDetailView.as_view(), name="user-detail"),
]
