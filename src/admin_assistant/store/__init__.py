"""In-memory mock store used by the command interpreter."""

from admin_assistant.store.fixture import load_mock_store
from admin_assistant.store.models import (
    LOW_STOCK_THRESHOLD,
    AnalyticsData,
    Order,
    Product,
    StoreData,
)

__all__ = [
    "LOW_STOCK_THRESHOLD",
    "AnalyticsData",
    "Order",
    "Product",
    "StoreData",
    "load_mock_store",
]
