from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ["-created_at"]
    list_display = ["email", "name", "role", "status", "created_at"]
    list_filter = ["role", "status", "is_staff"]
    search_fields = ["email", "name", "clerk_id"]
    readonly_fields = ["clerk_id", "created_at", "updated_at", "last_login", "date_joined"]
    fieldsets = [
        (None, {"fields": ["email", "clerk_id"]}),
        ("Profile", {"fields": ["name", "phone"]}),
        ("Access", {"fields": ["role", "status", "is_active", "is_staff", "is_superuser"]}),
        ("Dates", {"fields": ["last_login", "date_joined", "created_at", "updated_at"]}),
    ]
