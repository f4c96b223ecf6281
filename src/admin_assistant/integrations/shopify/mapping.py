"""Mapping from Shopify Admin GraphQL nodes to catalog models."""

from typing import Any

from admin_assistant.models.catalog import CatalogProduct, Money, PriceRange

PRODUCT_GID_PREFIX = "gid://shopify/Product/"


def to_product_gid(product_id: str) -> str:
    """Return the fully qualified product id for a bare numeric id or a GID."""
    product_id = product_id.strip()
    if product_id.startswith(PRODUCT_GID_PREFIX):
        return product_id
    return f"{PRODUCT_GID_PREFIX}{product_id}"


def _parse_money(data: dict[str, Any] | None) -> Money | None:
    if not data:
        return None
    return Money(amount=str(data.get("amount", "0")), currency_code=data.get("currencyCode", ""))


def parse_price_range(data: dict[str, Any] | None) -> PriceRange | None:
    """Parse `priceRangeV2` into a PriceRange."""
    if not data:
        return None
    low = _parse_money(data.get("minVariantPrice"))
    high = _parse_money(data.get("maxVariantPrice"))
    if low is None or high is None:
        return None
    return PriceRange(min_variant_price=low, max_variant_price=high)


def _first_image_url(node: dict[str, Any]) -> str | None:
    if featured := node.get("featuredImage"):
        return featured.get("url")
    edges = (node.get("images") or {}).get("edges") or []
    if edges:
        return (edges[0].get("node") or {}).get("url")
    return None


def parse_product(node: dict[str, Any]) -> CatalogProduct:
    """Map a `Product` GraphQL node (list or detail query) to CatalogProduct."""
    return CatalogProduct(
        id=node["id"],
        title=node.get("title", ""),
        status=node.get("status", ""),
        total_inventory=node.get("totalInventory"),
        vendor=node.get("vendor"),
        online_store_url=node.get("onlineStoreUrl"),
        image_url=_first_image_url(node),
        description_html=node.get("descriptionHtml"),
        price_range=parse_price_range(node.get("priceRangeV2")),
    )
