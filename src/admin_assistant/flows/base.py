"""Shared plumbing for single-turn generation flows."""

from collections.abc import Iterator
from contextlib import contextmanager

from admin_assistant.exceptions import CompletionError, GenerationFailed, ProviderUnavailable


@contextmanager
def generation_errors(failure_message: str) -> Iterator[None]:
    """
    Translate a provider result with no usable output into GenerationFailed.

    ProviderUnavailable and ValidationError pass through as they are.
    """
    try:
        yield
    except (ProviderUnavailable, GenerationFailed):
        raise
    except CompletionError as e:
        raise GenerationFailed(failure_message, detail=e.detail) from e
