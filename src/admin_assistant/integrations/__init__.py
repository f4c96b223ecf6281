"""Remote catalog integrations."""

from admin_assistant.integrations.base import CatalogSource

__all__ = ["CatalogSource"]
