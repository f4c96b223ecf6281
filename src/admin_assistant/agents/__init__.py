"""Agents built on the completion provider."""

from admin_assistant.agents.catalog_agent import AgentReply, CatalogQueryAgent

__all__ = ["AgentReply", "CatalogQueryAgent"]
