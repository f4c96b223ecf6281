"""Completion provider adapter over Pydantic AI."""

from admin_assistant.llm.completion import (
    CompletionProvider,
    PromptTemplate,
    get_completion_provider_from_settings,
)

__all__ = [
    "CompletionProvider",
    "PromptTemplate",
    "get_completion_provider_from_settings",
]
