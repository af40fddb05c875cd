"""Shopping cart state container.

A Cart owns its line items and writes the whole collection back to its
storage after every mutation. Storage is injected, so views bind a cart to the
visitor's session while tests use an isolated in-memory slot.

Persisted shape:
    {"version": 1, "items": [{"id", "productId", "quantity", "price"}, ...]}
"""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Protocol

from .conf import get_setting

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    """One product-quantity-price record. Price is captured when first added."""

    id: str
    product_id: str
    quantity: int
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "quantity": self.quantity,
            "price": str(self.price),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        return cls(
            id=str(data["id"]),
            product_id=str(data["productId"]),
            quantity=int(data["quantity"]),
            price=Decimal(str(data["price"])),
        )


class CartStorage(Protocol):
    """Durable slot holding the serialized cart."""

    def load(self) -> dict | None:
        ...

    def save(self, payload: dict) -> None:
        ...


class MemoryCartStorage:
    """In-process slot; each instance is independent."""

    def __init__(self, payload: dict | None = None):
        self.payload = payload

    def load(self) -> dict | None:
        return self.payload

    def save(self, payload: dict) -> None:
        self.payload = payload


class SessionCartStorage:
    """Slot stored under a fixed key in the Django session."""

    def __init__(self, session, key: str | None = None):
        self.session = session
        self.key = key or get_setting("CART_SESSION_KEY")

    def load(self) -> dict | None:
        return self.session.get(self.key)

    def save(self, payload: dict) -> None:
        self.session[self.key] = payload


def generate_line_id() -> str:
    return f"cart-{uuid.uuid4().hex}"


def _from_v0(payload: dict) -> dict:
    # Version 0 is the storefront's client-side shape: {"state": {"items": [...]}, "version": 0}
    state = payload.get("state") or {}
    return {"version": 1, "items": state.get("items", [])}


PAYLOAD_UPGRADES = {
    0: _from_v0,
}


def upgrade_payload(payload, target_version):
    """Step a stored payload up to target_version.

    Returns None when the payload has no version tag or no upgrade path exists.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("version"), int):
        return None
    while payload["version"] != target_version:
        upgrade = PAYLOAD_UPGRADES.get(payload["version"])
        if upgrade is None:
            return None
        payload = upgrade(payload)
    return payload


class Cart:
    """Line items keyed by product, with derived totals.

    At most one line exists per product: adding a product already in the cart
    increases that line's quantity. Mutations never raise; unknown line ids are
    ignored.
    """

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._lines: list[CartLine] = self._restore()

    def __iter__(self):
        return iter(list(self._lines))

    def __len__(self):
        return len(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    def get_line(self, line_id: str) -> CartLine | None:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def find_by_product(self, product_id) -> CartLine | None:
        product_id = str(product_id)
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    def add_item(self, product_id, quantity: int, unit_price) -> CartLine | None:
        """Add quantity of a product, merging into its existing line.

        The stored unit price of an existing line is kept. Non-positive
        quantities are ignored.
        """
        if quantity <= 0:
            return self.find_by_product(product_id)

        line = self.find_by_product(product_id)
        if line is not None:
            line.quantity += quantity
        else:
            line = CartLine(
                id=generate_line_id(),
                product_id=str(product_id),
                quantity=quantity,
                price=Decimal(str(unit_price)),
            )
            self._lines.append(line)

        self._persist()
        return line

    def remove_item(self, line_id: str) -> None:
        remaining = [line for line in self._lines if line.id != line_id]
        if len(remaining) == len(self._lines):
            return
        self._lines = remaining
        self._persist()

    def update_quantity(self, line_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(line_id)
            return

        line = self.get_line(line_id)
        if line is None:
            return
        line.quantity = quantity
        self._persist()

    def clear(self) -> None:
        self._lines = []
        self._persist()

    def get_total_price(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def get_total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    def to_dict(self) -> dict:
        return {
            "version": get_setting("CART_VERSION"),
            "items": [line.to_dict() for line in self._lines],
        }

    def _persist(self) -> None:
        self.storage.save(self.to_dict())

    def _restore(self) -> list[CartLine]:
        payload = self.storage.load()
        if not payload:
            return []

        version = get_setting("CART_VERSION")
        payload = upgrade_payload(payload, version)
        if payload is None:
            logger.warning(f"Discarding stored cart with unsupported version (expected {version})")
            return []

        try:
            return [CartLine.from_dict(item) for item in payload.get("items", [])]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.warning(f"Discarding malformed stored cart: {e}")
            return []
