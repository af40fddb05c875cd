"""Tests for the cart shipping summary."""

from decimal import Decimal

from saakie.store.shipping import summarize


class TestSummarize:
    def test_below_threshold_pays_flat_charge(self):
        summary = summarize(Decimal("1500"))

        assert summary.shipping == Decimal("100")
        assert summary.total == Decimal("1600")
        assert summary.free_shipping is False
        assert summary.amount_to_free_shipping == Decimal("1499")

    def test_threshold_ships_free(self):
        summary = summarize(2999)

        assert summary.shipping == Decimal("0")
        assert summary.total == Decimal("2999")
        assert summary.free_shipping is True
        assert summary.amount_to_free_shipping == Decimal("0")

    def test_empty_cart_is_not_charged(self):
        summary = summarize(0)

        assert summary.shipping == Decimal("0")
        assert summary.total == Decimal("0")

    def test_settings_override(self, settings):
        settings.STORE = {"SHIPPING_CHARGE": 50, "FREE_SHIPPING_THRESHOLD": 1000}

        summary = summarize(Decimal("999"))

        assert summary.shipping == Decimal("50")
        assert summarize(Decimal("1000")).free_shipping is True
