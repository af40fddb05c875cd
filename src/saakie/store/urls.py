"""Store URL patterns."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    # Catalog
    path("categories/", views.CategoryListView.as_view(), name="category-list"),
    path("products/", views.ProductListView.as_view(), name="product-list"),
    path("products/<str:product_id>/", views.ProductDetailView.as_view(), name="product-detail"),

    # Cart
    path("cart/", views.CartView.as_view(), name="cart"),
    path("cart/items/", views.CartItemsView.as_view(), name="cart-items"),
    path("cart/items/<str:line_id>/", views.CartItemView.as_view(), name="cart-item"),
]
