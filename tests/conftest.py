"""Pytest configuration and fixtures."""

import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from pydantic_ai.models.test import TestModel

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Keep tests away from real credentials in the developer's environment
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key")
os.environ["SHOPIFY_SHOP_DOMAIN"] = ""
os.environ["SHOPIFY_ADMIN_ACCESS_TOKEN"] = ""

from admin_assistant.integrations.base import CatalogSource  # noqa: E402
from admin_assistant.llm.completion import CompletionProvider, PromptTemplate  # noqa: E402
from admin_assistant.models.catalog import CatalogProduct, Money, PriceRange, ShopInfo  # noqa: E402

# 1x1 PNG signature, enough to pass data URI validation
PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgo="

FIXED_NOW = datetime(2025, 6, 11, 9, 30, 12, 345000, tzinfo=UTC)


class FakeCatalog(CatalogSource):
    """In-memory catalog that records every call and can be told to fail."""

    def __init__(
        self,
        products: list[CatalogProduct] | None = None,
        shop: ShopInfo | None = None,
        error: Exception | None = None,
    ) -> None:
        self.products = products or []
        self.shop = shop
        self.error = error
        self.list_calls: list[int] = []
        self.get_calls: list[str] = []
        self.closed = False

    @property
    def platform_name(self) -> str:
        return "fake"

    async def shop_info(self) -> ShopInfo | None:
        if self.error:
            raise self.error
        return self.shop

    async def list_products(self, first: int) -> list[CatalogProduct]:
        self.list_calls.append(first)
        if self.error:
            raise self.error
        return self.products[:first]

    async def get_product(self, product_id: str) -> CatalogProduct | None:
        self.get_calls.append(product_id)
        if self.error:
            raise self.error
        return next((p for p in self.products if p.id == product_id), None)

    async def close(self) -> None:
        self.closed = True


class ScriptedProvider(CompletionProvider):
    """Completion provider returning canned outputs keyed by prompt name."""

    def __init__(self, outputs: dict[str, Any] | None = None) -> None:
        super().__init__(model=TestModel())
        self.outputs: dict[str, Any] = outputs or {}
        self.calls: list[tuple[str, Any]] = []

    async def complete(
        self,
        prompt: PromptTemplate,
        input_values,
        input_schema,
        output_schema,
        tools=None,
        deps=None,
    ):
        self.calls.append((prompt.name, input_values))
        output = self.outputs[prompt.name]
        if isinstance(output, Exception):
            raise output
        return output

    def prompt_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def png_data_uri() -> str:
    return PNG_DATA_URI


@pytest.fixture
def fixed_clock():
    """Clock returning a constant time (epoch millis end in 12345)."""
    return lambda: FIXED_NOW


@pytest.fixture
def catalog_products() -> list[CatalogProduct]:
    """Sample remote catalog products."""
    return [
        CatalogProduct(
            id="gid://shopify/Product/1001",
            title="Aurora Desk Lamp",
            status="ACTIVE",
            total_inventory=14,
            vendor="Lumen Co",
            online_store_url="https://example.myshopify.com/products/aurora-desk-lamp",
            image_url="https://cdn.shopify.com/s/files/aurora.png",
            description_html="<p>Warm dimmable light.</p>",
            price_range=PriceRange(
                min_variant_price=Money(amount="49.0", currency_code="USD"),
                max_variant_price=Money(amount="59.0", currency_code="USD"),
            ),
        ),
        CatalogProduct(
            id="gid://shopify/Product/1002",
            title="Birch Coaster Set",
            status="DRAFT",
            total_inventory=0,
            vendor=None,
        ),
        CatalogProduct(
            id="gid://shopify/Product/1003",
            title="Cedar Candle",
            status="ACTIVE",
            total_inventory=120,
            vendor="Hearth",
        ),
    ]


@pytest.fixture
def fake_catalog(catalog_products: list[CatalogProduct]) -> FakeCatalog:
    return FakeCatalog(
        products=catalog_products,
        shop=ShopInfo(name="Test Shop", email="owner@example.com"),
    )


@pytest.fixture
def scripted_provider() -> ScriptedProvider:
    return ScriptedProvider()
