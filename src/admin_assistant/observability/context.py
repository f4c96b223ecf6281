"""Session context propagation using contextvars."""

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

# Context variable for the conversation session handling the current turn
_current_session: ContextVar[str | None] = ContextVar("current_session", default=None)


def get_current_session_id() -> str | None:
    """
    Get the current session ID from context.

    Returns:
        The session ID of the turn being processed, or None outside a turn.
    """
    return _current_session.get()


@contextmanager
def session_context(session_id: str) -> Generator[str, None, None]:
    """
    Context manager for session context.

    Usage:
        with session_context(session_id):
            # Logs emitted here carry the session id
            pass

    Args:
        session_id: The session whose turn is being processed.

    Yields:
        The session id.
    """
    token = _current_session.set(session_id)
    try:
        yield session_id
    finally:
        _current_session.reset(token)


# Extra log fields for the code running in this context (see LogContext)
_log_extra: ContextVar[dict[str, Any] | None] = ContextVar("log_extra", default=None)


def get_log_extra() -> dict[str, Any] | None:
    """Get the extra log fields set by the innermost active LogContext."""
    return _log_extra.get()


def set_log_extra(extra: dict[str, Any] | None) -> Token:
    """Set extra log fields; returns a token for reset_log_extra."""
    return _log_extra.set(extra)


def reset_log_extra(token: Token) -> None:
    _log_extra.reset(token)
