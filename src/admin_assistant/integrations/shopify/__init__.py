"""Shopify integration: Admin GraphQL client and mapping."""

from admin_assistant.integrations.shopify.client import (
    ShopifyAdminClient,
    get_shopify_client_from_settings,
)
from admin_assistant.integrations.shopify.mapping import to_product_gid

__all__ = ["ShopifyAdminClient", "get_shopify_client_from_settings", "to_product_gid"]
