"""Catalog models for products and shop data read from the remote store."""

from pydantic import BaseModel, Field


class Money(BaseModel):
    """An amount in a currency, as reported by Shopify (amount is a decimal string)."""

    amount: str = Field(description="Decimal amount, e.g. '19.99'")
    currency_code: str = Field(description="ISO currency code, e.g. 'USD'")


class PriceRange(BaseModel):
    """Range of variant prices for a product."""

    min_variant_price: Money
    max_variant_price: Money


class CatalogProduct(BaseModel):
    """
    Product as read from the remote catalog.

    Fetched fresh on every call; never cached beyond one request/response cycle.
    """

    id: str = Field(description="Shopify global id (gid://shopify/Product/<n>)")
    title: str = Field(description="Product title")
    status: str = Field(description="ACTIVE, DRAFT or ARCHIVED")
    total_inventory: int | None = Field(default=None, description="Inventory across all locations")
    vendor: str | None = Field(default=None)
    online_store_url: str | None = Field(default=None, description="Storefront URL if published")
    image_url: str | None = Field(default=None, description="Featured or first image URL")
    description_html: str | None = Field(default=None, description="Product description HTML")
    price_range: PriceRange | None = Field(default=None)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "gid://shopify/Product/1234567890",
                    "title": "Wireless Headphones Pro",
                    "status": "ACTIVE",
                    "total_inventory": 45,
                    "vendor": "Acme",
                    "online_store_url": None,
                    "image_url": "https://cdn.shopify.com/s/files/headphones.png",
                }
            ]
        }
    }


class ShopInfo(BaseModel):
    """Basic shop identity."""

    name: str
    email: str


class ShopStatus(BaseModel):
    """Connection status of the remote catalog, shown as a persistent indicator."""

    connected: bool
    shop: ShopInfo | None = None
    error: str | None = None
