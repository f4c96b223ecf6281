"""Catalog tools exposed to the query agent: list products and product details."""

import logging
import time
from dataclasses import dataclass

from pydantic import BaseModel, Field
from pydantic_ai import RunContext, Tool

from admin_assistant.exceptions import ToolExecutionError
from admin_assistant.integrations.base import CatalogSource
from admin_assistant.integrations.shopify.mapping import to_product_gid
from admin_assistant.models.catalog import CatalogProduct, PriceRange
from admin_assistant.observability.metrics import record_tool_call
from admin_assistant.observability.tracing import traced

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_COUNT = 5
MIN_PRODUCT_COUNT = 1
MAX_PRODUCT_COUNT = 20


@dataclass
class CatalogToolDeps:
    """Dependencies for the catalog tools."""

    catalog: CatalogSource


class ProductSummary(BaseModel):
    """Product summary returned by the list tool."""

    id: str = Field(description="The Shopify GID of the product")
    name: str = Field(description="The title or name of the product")
    status: str = Field(description="The product status (ACTIVE, DRAFT, ARCHIVED)")
    inventory: int | None = Field(description="Total inventory across all locations")
    vendor: str | None = Field(description="The vendor of the product")
    online_store_url: str | None = Field(description="The product URL on the online store")
    image_url: str | None = Field(description="URL of the product's featured image")


class ProductDetail(ProductSummary):
    """Full product details returned by the lookup tool."""

    description_html: str | None = Field(default=None, description="Description in HTML")
    price_range: PriceRange | None = Field(default=None, description="Range of variant prices")


def clamp_count(count: int | None) -> int:
    """Clamp a requested product count into [1, 20]; a missing or zero count means 5."""
    if not count:
        return DEFAULT_PRODUCT_COUNT
    return min(max(MIN_PRODUCT_COUNT, count), MAX_PRODUCT_COUNT)


def normalize_product_id(product_id: str) -> str:
    """Turn a bare numeric id into a product GID; a full GID is returned unchanged."""
    return to_product_gid(product_id)


def _to_summary(product: CatalogProduct) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        name=product.title,
        status=product.status,
        inventory=product.total_inventory,
        vendor=product.vendor,
        online_store_url=product.online_store_url,
        image_url=product.image_url or None,
    )


@traced(name="catalog.list_products", attributes={"component": "tools"})
async def list_products(catalog: CatalogSource, count: int | None = DEFAULT_PRODUCT_COUNT) -> list[ProductSummary]:
    """
    List products from the remote catalog.

    Out-of-range counts are silently corrected. Every call is a fresh request.

    Raises:
        ToolExecutionError: The catalog call failed (the upstream message is kept).
    """
    safe_count = clamp_count(count)
    start = time.perf_counter()
    try:
        products = await catalog.list_products(safe_count)
    except Exception as e:
        record_tool_call("list_products", time.perf_counter() - start, "error")
        logger.error("Error in list_products tool: %s", e)
        raise ToolExecutionError(f"Failed to list Shopify products: {e}") from e
    record_tool_call("list_products", time.perf_counter() - start)
    return [_to_summary(p) for p in products]


@traced(name="catalog.get_product_by_id", attributes={"component": "tools"})
async def get_product_by_id(catalog: CatalogSource, product_id: str) -> ProductDetail | None:
    """
    Fetch one product by numeric id or full GID.

    Returns:
        The product details, or None when the catalog has no such product.

    Raises:
        ToolExecutionError: The catalog call failed (the upstream message is kept).
    """
    gid = normalize_product_id(product_id)
    start = time.perf_counter()
    try:
        product = await catalog.get_product(gid)
    except Exception as e:
        record_tool_call("get_product_by_id", time.perf_counter() - start, "error")
        logger.error("Error in get_product_by_id tool for ID %s: %s", product_id, e)
        raise ToolExecutionError(
            f"Failed to get Shopify product details for ID {product_id}: {e}"
        ) from e
    record_tool_call("get_product_by_id", time.perf_counter() - start)
    if product is None:
        return None
    return ProductDetail(
        **_to_summary(product).model_dump(),
        description_html=product.description_html,
        price_range=product.price_range,
    )


async def list_shopify_products(
    ctx: RunContext[CatalogToolDeps],
    count: int = DEFAULT_PRODUCT_COUNT,
) -> list[ProductSummary]:
    """Fetches a list of products from the Shopify store. Allows specifying how many products to retrieve (defaults to 5, max 20).

    Args:
        count: Number of products to list (e.g. 5, 10). Maximum 20.
    """
    return await list_products(ctx.deps.catalog, count)


async def get_shopify_product_by_id(
    ctx: RunContext[CatalogToolDeps],
    product_id: str,
) -> ProductDetail | None:
    """Fetches detailed information about a specific product from the Shopify store using its ID (numeric part or full GID). Example ID: "1234567890" or "gid://shopify/Product/1234567890".

    Args:
        product_id: The ID of the product to fetch. Either the numeric ID or the full GID.
    """
    return await get_product_by_id(ctx.deps.catalog, product_id)


CATALOG_TOOLS: list[Tool[CatalogToolDeps]] = [
    Tool(list_shopify_products, takes_ctx=True),
    Tool(get_shopify_product_by_id, takes_ctx=True),
]
