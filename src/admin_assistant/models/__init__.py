"""Data models shared across the assistant."""

from admin_assistant.models.catalog import CatalogProduct, Money, PriceRange, ShopInfo, ShopStatus

__all__ = ["CatalogProduct", "Money", "PriceRange", "ShopInfo", "ShopStatus"]
