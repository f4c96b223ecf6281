"""Tests for the Shopify Admin GraphQL client and node mapping."""

import json

import httpx
import pytest

from admin_assistant.exceptions import CatalogAPIError, ConfigurationError
from admin_assistant.integrations.shopify.client import ShopifyAdminClient
from admin_assistant.integrations.shopify.mapping import parse_product, to_product_gid


def _client(handler, domain: str = "test-shop.myshopify.com", token: str = "shpat_test") -> ShopifyAdminClient:
    return ShopifyAdminClient(
        store_domain=domain,
        access_token=token,
        transport=httpx.MockTransport(handler),
    )


class TestProductGid:
    """Tests for to_product_gid."""

    def test_numeric_id_is_prefixed(self) -> None:
        assert to_product_gid("1234567890") == "gid://shopify/Product/1234567890"

    def test_full_gid_unchanged(self) -> None:
        gid = "gid://shopify/Product/1234567890"
        assert to_product_gid(gid) == gid


class TestParseProduct:
    """Tests for parse_product."""

    def test_list_node_uses_featured_image(self) -> None:
        product = parse_product(
            {
                "id": "gid://shopify/Product/1",
                "title": "Lamp",
                "status": "ACTIVE",
                "totalInventory": 3,
                "vendor": "Lumen",
                "onlineStoreUrl": None,
                "featuredImage": {"url": "https://cdn.example.com/lamp.png"},
            }
        )
        assert product.image_url == "https://cdn.example.com/lamp.png"
        assert product.total_inventory == 3
        assert product.price_range is None

    def test_detail_node_uses_first_image_and_price_range(self) -> None:
        product = parse_product(
            {
                "id": "gid://shopify/Product/2",
                "title": "Candle",
                "status": "DRAFT",
                "descriptionHtml": "<p>Smells nice</p>",
                "priceRangeV2": {
                    "minVariantPrice": {"amount": "10.0", "currencyCode": "USD"},
                    "maxVariantPrice": {"amount": "12.5", "currencyCode": "USD"},
                },
                "images": {"edges": [{"node": {"url": "https://cdn.example.com/candle.png"}}]},
            }
        )
        assert product.image_url == "https://cdn.example.com/candle.png"
        assert product.price_range.min_variant_price.amount == "10.0"
        assert product.price_range.max_variant_price.currency_code == "USD"

    def test_missing_image_is_none(self) -> None:
        product = parse_product({"id": "gid://shopify/Product/3", "title": "Bare", "status": "ACTIVE"})
        assert product.image_url is None


class TestShopifyAdminClient:
    """Tests for ShopifyAdminClient."""

    def test_missing_credentials_do_not_fail_construction(self) -> None:
        """Construction never checks credentials."""
        client = ShopifyAdminClient(store_domain="", access_token="")
        assert client.platform_name == "shopify"

    @pytest.mark.asyncio
    async def test_missing_domain_raises_on_first_call(self) -> None:
        client = ShopifyAdminClient(store_domain="", access_token="shpat_test")
        with pytest.raises(ConfigurationError, match="SHOPIFY_SHOP_DOMAIN"):
            await client.shop_info()

    @pytest.mark.asyncio
    async def test_missing_token_raises_on_first_call(self) -> None:
        client = ShopifyAdminClient(store_domain="test-shop.myshopify.com", access_token="")
        with pytest.raises(ConfigurationError, match="SHOPIFY_ADMIN_ACCESS_TOKEN"):
            await client.list_products(5)

    @pytest.mark.asyncio
    async def test_list_products_request_and_mapping(self) -> None:
        """Products are requested with the count and mapped from GraphQL edges."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "data": {
                        "products": {
                            "edges": [
                                {
                                    "node": {
                                        "id": "gid://shopify/Product/1",
                                        "title": "Lamp",
                                        "status": "ACTIVE",
                                        "totalInventory": 4,
                                        "vendor": "Lumen",
                                        "onlineStoreUrl": None,
                                        "featuredImage": None,
                                    }
                                }
                            ]
                        }
                    }
                },
            )

        client = _client(handler)
        products = await client.list_products(3)
        await client.close()

        assert [p.title for p in products] == ["Lamp"]
        assert products[0].image_url is None
        request = requests[0]
        assert request.url.path == "/admin/api/2024-07/graphql.json"
        assert request.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert json.loads(request.content)["variables"] == {"first": 3}

    @pytest.mark.asyncio
    async def test_get_product_null_is_none(self) -> None:
        """A null product is a miss, not an error."""
        seen_ids: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_ids.append(json.loads(request.content)["variables"]["id"])
            return httpx.Response(200, json={"data": {"product": None}})

        client = _client(handler)
        assert await client.get_product("42") is None
        assert seen_ids == ["gid://shopify/Product/42"]

    @pytest.mark.asyncio
    async def test_shop_info(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"data": {"shop": {"name": "Test Shop", "email": "owner@example.com"}}}
            )

        info = await _client(handler).shop_info()
        assert info.name == "Test Shop"
        assert info.email == "owner@example.com"

    @pytest.mark.asyncio
    async def test_graphql_errors_raise_catalog_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"errors": [{"message": "Field 'foo' doesn't exist"}]})

        with pytest.raises(CatalogAPIError, match="Field 'foo' doesn't exist"):
            await _client(handler).list_products(5)

    @pytest.mark.asyncio
    async def test_unauthorized_mentions_access_token(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": "[API] Invalid API key or access token"})

        with pytest.raises(CatalogAPIError, match="SHOPIFY_ADMIN_ACCESS_TOKEN"):
            await _client(handler).shop_info()

    @pytest.mark.asyncio
    async def test_connection_failure_mentions_domain(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        with pytest.raises(CatalogAPIError, match="SHOPIFY_SHOP_DOMAIN"):
            await _client(handler, domain="typo-shop.myshopify.com").shop_info()
