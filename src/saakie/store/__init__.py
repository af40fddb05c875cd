"""Store module for e-commerce functionality.

Provides the product catalog, the session-backed shopping cart and the
order/address records surfaced in profile and directory views.
"""
