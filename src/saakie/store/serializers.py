"""Plain-dict renderings of store records for JSON responses."""

from saakie.core.http import isoformat, money

from .conf import get_setting
from .shipping import summarize


def serialize_category(category):
    return {
        "id": str(category.pk),
        "name": category.name,
        "slug": category.slug,
        "description": category.description or None,
    }


def serialize_product(product):
    low_stock_threshold = get_setting("LOW_STOCK_THRESHOLD")
    return {
        "id": str(product.pk),
        "name": product.name,
        "description": product.description,
        "price": money(product.price),
        "images": product.images or [],
        "category": serialize_category(product.category) if product.category else None,
        "stock": product.stock,
        "inStock": product.in_stock,
        "lowStock": 0 < product.stock < low_stock_threshold,
        "featured": product.featured,
        "createdAt": isoformat(product.created_at),
        "updatedAt": isoformat(product.updated_at),
    }


def serialize_address(address):
    return {
        "id": str(address.pk),
        "line1": address.line1,
        "line2": address.line2 or None,
        "city": address.city,
        "state": address.state,
        "pincode": address.pincode,
        "country": address.country,
        "isDefault": address.is_default,
    }


def serialize_order_item(item):
    return {
        "id": str(item.pk),
        "productId": str(item.product_id) if item.product_id else None,
        "quantity": item.quantity,
        "price": money(item.price),
    }


def serialize_order_summary(order):
    return {
        "id": str(order.pk),
        "totalAmount": money(order.total_amount),
        "status": order.status,
        "createdAt": isoformat(order.created_at),
    }


def serialize_order(order, include_items=False):
    data = serialize_order_summary(order)
    data.update({
        "paymentMethod": order.payment_method,
        "paymentStatus": order.payment_status,
        "trackingNumber": order.tracking_number or None,
    })
    if include_items:
        data["items"] = [serialize_order_item(item) for item in order.items.all()]
        data["shippingAddress"] = (
            serialize_address(order.shipping_address) if order.shipping_address else None
        )
    return data


def serialize_cart(cart):
    summary = summarize(cart.get_total_price())
    return {
        "items": [
            {
                "id": line.id,
                "productId": line.product_id,
                "quantity": line.quantity,
                "price": money(line.price),
                "lineTotal": money(line.line_total),
            }
            for line in cart
        ],
        "totalItems": cart.get_total_items(),
        "totalPrice": money(cart.get_total_price()),
        "summary": {
            "subtotal": money(summary.subtotal),
            "shipping": money(summary.shipping),
            "total": money(summary.total),
            "freeShipping": summary.free_shipping,
            "amountToFreeShipping": money(summary.amount_to_free_shipping),
        },
    }
