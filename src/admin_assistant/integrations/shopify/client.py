"""Shopify Admin GraphQL client (read-only catalog access)."""

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from admin_assistant.exceptions import CatalogAPIError, ConfigurationError
from admin_assistant.integrations.base import CatalogSource
from admin_assistant.integrations.shopify.mapping import parse_product, to_product_gid
from admin_assistant.integrations.shopify.queries import (
    GET_PRODUCT_QUERY,
    LIST_PRODUCTS_QUERY,
    SHOP_INFO_QUERY,
)
from admin_assistant.models.catalog import CatalogProduct, ShopInfo

if TYPE_CHECKING:
    from admin_assistant.config import Settings

logger = logging.getLogger(__name__)


class ShopifyAdminClient(CatalogSource):
    """
    Shopify catalog via the Admin GraphQL API.

    Credentials are checked when the first request is made, not at construction,
    so a missing domain or token only disables catalog features.
    """

    DEFAULT_API_VERSION = "2024-07"

    def __init__(
        self,
        store_domain: str,
        access_token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Shopify client.

        Args:
            store_domain: The Shopify store domain (e.g., "my-store.myshopify.com").
            access_token: Shopify Admin API access token.
            api_version: Admin API version.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.store_domain = store_domain.strip().rstrip("/")
        self.access_token = access_token.strip()
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def platform_name(self) -> str:
        return "shopify"

    @property
    def base_url(self) -> str:
        return f"https://{self.store_domain}/admin/api/{self.api_version}"

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._check_configuration()
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "X-Shopify-Access-Token": self.access_token,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _check_configuration(self) -> None:
        if not self.store_domain:
            raise ConfigurationError(
                "Shopify client initialization failed: SHOPIFY_SHOP_DOMAIN is not set",
                detail=(
                    "Set SHOPIFY_SHOP_DOMAIN (e.g. your-shop-name.myshopify.com) in the "
                    "environment or .env file and restart the service."
                ),
            )
        if not self.access_token:
            raise ConfigurationError(
                "Shopify client initialization failed: SHOPIFY_ADMIN_ACCESS_TOKEN is not set",
                detail=(
                    "Set SHOPIFY_ADMIN_ACCESS_TOKEN to an Admin API access token in the "
                    "environment or .env file and restart the service."
                ),
            )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL document and return its `data` object."""
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = await self.client.post("/graphql.json", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"Shopify API returned HTTP {status}"
            if status in (401, 403):
                message += (
                    " (This could be due to an invalid SHOPIFY_ADMIN_ACCESS_TOKEN "
                    "or insufficient permissions.)"
                )
            raise CatalogAPIError(message, detail=e.response.text) from e
        except httpx.TransportError as e:
            raise CatalogAPIError(
                f"Failed to reach Shopify: {e}"
                f" (This could be due to an incorrect SHOPIFY_SHOP_DOMAIN: "
                f"'{self.store_domain}' or network issues.)"
            ) from e

        body = response.json()
        if errors := body.get("errors"):
            logger.error("Shopify API errors: %s", json.dumps(errors))
            raise CatalogAPIError(f"Shopify API error: {_first_error_message(errors)}")
        return body.get("data") or {}

    async def shop_info(self) -> ShopInfo | None:
        data = await self._execute(SHOP_INFO_QUERY)
        shop = data.get("shop")
        if not shop:
            return None
        return ShopInfo(name=shop.get("name", ""), email=shop.get("email", ""))

    async def list_products(self, first: int) -> list[CatalogProduct]:
        data = await self._execute(LIST_PRODUCTS_QUERY, {"first": first})
        edges = (data.get("products") or {}).get("edges") or []
        return [parse_product(edge["node"]) for edge in edges if edge.get("node")]

    async def get_product(self, product_id: str) -> CatalogProduct | None:
        gid = to_product_gid(product_id)
        data = await self._execute(GET_PRODUCT_QUERY, {"id": gid})
        node = data.get("product")
        if not node:
            return None
        return parse_product(node)


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
    if isinstance(errors, dict) and errors.get("message"):
        return str(errors["message"])
    return json.dumps(errors)


def get_shopify_client_from_settings(settings: "Settings | None" = None) -> ShopifyAdminClient:
    """
    Build the Shopify client from application settings.

    Always returns a client; missing credentials surface as ConfigurationError
    on the first call.
    """
    if settings is None:
        from admin_assistant.config import get_settings
        settings = get_settings()
    return ShopifyAdminClient(
        store_domain=settings.shopify_shop_domain,
        access_token=settings.shopify_admin_access_token,
        api_version=settings.shopify_api_version,
        timeout=settings.shopify_timeout,
    )
