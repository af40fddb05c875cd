"""Catalog and cart API views.

Catalog endpoints are public. Cart endpoints operate on the visitor's own
session cart; the stock checks here are advisory and read the product record
at request time.
"""

import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.core.paginator import Paginator
from django.db.models import Q
from django.http import JsonResponse
from django.views import View

from saakie.core.http import read_json

from .cart import Cart, SessionCartStorage
from .conf import get_setting
from .models import Category, Product
from .serializers import serialize_cart, serialize_category, serialize_product

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "price-asc": ["price", "-created_at"],
    "price-desc": ["-price", "-created_at"],
    "name-asc": ["name"],
    "name-desc": ["-name"],
    "newest": ["-created_at"],
}


def get_cart(request):
    """Return the cart bound to the request's session."""
    return Cart(SessionCartStorage(request.session))


def _parse_price(value):
    if value in (None, ""):
        return None
    try:
        price = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"Invalid price: {value}")
    if not price.is_finite():
        raise ValueError(f"Invalid price: {value}")
    return price


def _parse_quantity(value, default=None):
    if value is None:
        return default
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _get_product(product_id):
    try:
        product_uuid = uuid.UUID(str(product_id))
    except ValueError:
        return None
    return Product.objects.select_related("category").filter(pk=product_uuid).first()


class CategoryListView(View):
    """List product categories.

    GET /shop/categories/
    """

    def get(self, request):
        categories = Category.objects.all()
        return JsonResponse({"categories": [serialize_category(c) for c in categories]})


class ProductListView(View):
    """Browse the catalog.

    GET /shop/products/?search=&categories=silk-sarees,cotton-sarees&minPrice=&maxPrice=&sort=&page=
    """

    def get(self, request):
        params = request.GET
        queryset = Product.objects.select_related("category")

        search = params.get("search", "").strip()
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(description__icontains=search)
            )

        slugs = [s for s in params.get("categories", "").split(",") if s]
        if params.get("category"):
            slugs.append(params["category"])
        if slugs:
            queryset = queryset.filter(category__slug__in=slugs)

        try:
            min_price = _parse_price(params.get("minPrice"))
            max_price = _parse_price(params.get("maxPrice"))
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)
        if min_price is not None:
            queryset = queryset.filter(price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)

        sort = params.get("sort", "newest")
        if sort not in SORT_ORDERS:
            return JsonResponse({"error": f"Invalid sort: {sort}"}, status=400)
        queryset = queryset.order_by(*SORT_ORDERS[sort])

        limit = get_setting("ITEMS_PER_PAGE")
        paginator = Paginator(queryset, limit)
        page = paginator.get_page(params.get("page"))

        return JsonResponse({
            "products": [serialize_product(p) for p in page.object_list],
            "pagination": {
                "page": page.number,
                "limit": limit,
                "total": paginator.count,
                "totalPages": paginator.num_pages if paginator.count else 0,
            },
            "priceRange": {"min": 0, "max": get_setting("MAX_PRICE")},
        })


class ProductDetailView(View):
    """Single product.

    GET /shop/products/<product_id>/
    """

    def get(self, request, product_id):
        product = _get_product(product_id)
        if product is None:
            return JsonResponse({"error": "Product not found"}, status=404)
        return JsonResponse(serialize_product(product))


class CartView(View):
    """The visitor's cart.

    GET /shop/cart/     lines, totals and shipping summary
    DELETE /shop/cart/  empty the cart
    """

    def get(self, request):
        return JsonResponse(serialize_cart(get_cart(request)))

    def delete(self, request):
        cart = get_cart(request)
        cart.clear()
        return JsonResponse(serialize_cart(cart))


class CartItemsView(View):
    """Add a product to the cart.

    POST /shop/cart/items/
    {
        "productId": "<uuid>",
        "quantity": 2
    }
    """

    def post(self, request):
        data, error = read_json(request)
        if error:
            return error

        quantity = _parse_quantity(data.get("quantity"), default=1)
        if quantity is None or quantity < 1:
            return JsonResponse({"error": "Quantity must be a positive integer"}, status=400)

        product = _get_product(data.get("productId"))
        if product is None:
            return JsonResponse({"error": "Product not found"}, status=404)

        cart = get_cart(request)
        existing = cart.find_by_product(product.pk)
        in_cart = existing.quantity if existing else 0
        if in_cart + quantity > product.stock:
            return JsonResponse({"error": f"Only {product.stock} items available"}, status=400)

        cart.add_item(product.pk, quantity, product.price)
        logger.debug(f"Added {quantity} x {product.pk} to cart")
        return JsonResponse(serialize_cart(cart), status=201)


class CartItemView(View):
    """Change or remove one cart line.

    PATCH /shop/cart/items/<line_id>/   {"quantity": 3}  (0 or less removes)
    DELETE /shop/cart/items/<line_id>/
    Unknown line ids leave the cart unchanged.
    """

    def patch(self, request, line_id):
        data, error = read_json(request)
        if error:
            return error

        quantity = _parse_quantity(data.get("quantity"))
        if quantity is None:
            return JsonResponse({"error": "Quantity must be an integer"}, status=400)

        cart = get_cart(request)
        line = cart.get_line(line_id)
        if line is not None and quantity > 0:
            product = _get_product(line.product_id)
            if product is not None and quantity > product.stock:
                return JsonResponse({"error": f"Only {product.stock} items available"}, status=400)

        cart.update_quantity(line_id, quantity)
        return JsonResponse(serialize_cart(cart))

    def delete(self, request, line_id):
        cart = get_cart(request)
        cart.remove_item(line_id)
        return JsonResponse(serialize_cart(cart))
