from django.contrib import admin

from .models import Address, Category, Order, OrderItem, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "sort_order"]
    prepopulated_fields = {"slug": ["name"]}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "category", "price", "stock", "featured", "created_at"]
    list_filter = ["category", "featured"]
    search_fields = ["name", "description"]


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "total_amount", "status", "payment_status", "created_at"]
    list_filter = ["status", "payment_status", "payment_method"]
    search_fields = ["user__email", "tracking_number"]
    inlines = [OrderItemInline]


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ["user", "line1", "city", "state", "pincode", "is_default"]
    search_fields = ["user__email", "city", "pincode"]
