"""Base catalog data source interface."""

from abc import ABC, abstractmethod

from admin_assistant.models.catalog import CatalogProduct, ShopInfo


class CatalogSource(ABC):
    """
    Read-only access to the remote e-commerce catalog.

    Implementations must not cache: every call is a fresh round trip.
    """

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Return the platform name (e.g., 'shopify')."""
        ...

    @abstractmethod
    async def shop_info(self) -> ShopInfo | None:
        """Fetch the shop's name and contact email."""
        ...

    @abstractmethod
    async def list_products(self, first: int) -> list[CatalogProduct]:
        """Fetch the first `first` products, sorted by title."""
        ...

    @abstractmethod
    async def get_product(self, product_id: str) -> CatalogProduct | None:
        """
        Fetch one product by its fully qualified id.

        Returns:
            The product, or None if the catalog has no such product.
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        return None
