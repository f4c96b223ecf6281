"""Tools the completion provider may call on the agent's behalf."""

from admin_assistant.tools.catalog import (
    CATALOG_TOOLS,
    CatalogToolDeps,
    ProductDetail,
    ProductSummary,
    clamp_count,
    get_product_by_id,
    list_products,
    normalize_product_id,
)

__all__ = [
    "CATALOG_TOOLS",
    "CatalogToolDeps",
    "ProductDetail",
    "ProductSummary",
    "clamp_count",
    "get_product_by_id",
    "list_products",
    "normalize_product_id",
]
