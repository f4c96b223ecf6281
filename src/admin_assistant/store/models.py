"""Mock store models: products, orders and the analytics snapshot."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProductStatus = Literal["active", "out_of_stock", "archived"]
OrderStatus = Literal["fulfilled", "pending", "cancelled", "processing"]

LOW_STOCK_THRESHOLD = 10


class Product(BaseModel):
    """A product in the in-memory store."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str
    price: float = Field(ge=0)
    inventory: int = Field(ge=0)
    status: ProductStatus
    sales: int = Field(default=0, ge=0)
    image: str = Field(description="Emoji or image URL")
    sku: str
    category: str
    description: str | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.status == "active" and self.inventory < LOW_STOCK_THRESHOLD


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    customer: str
    total: float
    status: OrderStatus
    date: str
    items: tuple[str, ...] = ()


class MonthlySales(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sales: float


class CategoryShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: float


class AnalyticsData(BaseModel):
    """Read-only analytics snapshot shown on the dashboard."""

    model_config = ConfigDict(frozen=True)

    today_sales: float
    today_orders: int
    conversion_rate: float
    top_product: str
    monthly_sales: tuple[MonthlySales, ...] = ()
    category_distribution: tuple[CategoryShare, ...] = ()


class StoreData(BaseModel):
    """
    The mock store as one immutable value.

    Products are the only part that changes (a committed draft adds one);
    `with_product` returns a new StoreData rather than mutating this one.
    """

    model_config = ConfigDict(frozen=True)

    products: tuple[Product, ...] = ()
    orders: tuple[Order, ...] = ()
    analytics: AnalyticsData

    def next_product_id(self) -> int:
        return max((p.id for p in self.products), default=0) + 1

    def with_product(self, product: Product) -> "StoreData":
        return self.model_copy(update={"products": (*self.products, product)})

    def low_stock_products(self) -> list[Product]:
        """Active products with inventory below the low-stock threshold."""
        return [p for p in self.products if p.is_low_stock]

    def pending_orders(self) -> list[Order]:
        """Orders still waiting on the admin (pending or processing)."""
        return [o for o in self.orders if o.status in ("pending", "processing")]
