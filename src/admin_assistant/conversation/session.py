"""Per-session conversation state and the in-memory session registry."""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from admin_assistant.conversation.models import (
    Message,
    MessageKind,
    ProductDraft,
    Sender,
    SuggestedAction,
)
from admin_assistant.exceptions import SessionNotFoundError
from admin_assistant.store import StoreData, load_mock_store

logger = logging.getLogger(__name__)


class SessionState(BaseModel):
    """
    Everything a turn reads and writes, as one immutable value.

    Every mutator returns a new SessionState; the message list is append-only
    and message ids increase by one per message.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[Message, ...] = ()
    draft: ProductDraft = ProductDraft()
    awaiting_features: bool = False
    store: StoreData

    @classmethod
    def initial(cls, store: StoreData | None = None) -> "SessionState":
        return cls(store=store if store is not None else load_mock_store())

    @property
    def next_message_id(self) -> int:
        return self.messages[-1].id + 1 if self.messages else 1

    @property
    def last_agent_message(self) -> Message | None:
        for message in reversed(self.messages):
            if message.sender == Sender.AGENT:
                return message
        return None

    def append_message(
        self,
        sender: Sender,
        kind: MessageKind | None,
        timestamp: datetime,
        text: str | None = None,
        payload: dict[str, Any] | None = None,
        suggested_actions: tuple[SuggestedAction, ...] = (),
    ) -> "SessionState":
        message = Message(
            id=self.next_message_id,
            sender=sender,
            kind=kind,
            timestamp=timestamp,
            text=text,
            payload=payload,
            suggested_actions=suggested_actions,
        )
        return self.model_copy(update={"messages": (*self.messages, message)})

    def replace_draft(self, draft: ProductDraft) -> "SessionState":
        return self.model_copy(update={"draft": draft})

    def update_draft(self, **changes: Any) -> "SessionState":
        return self.replace_draft(self.draft.model_copy(update=changes))

    def clear_draft(self) -> "SessionState":
        """Drop the draft and the awaiting-features flag together."""
        return self.model_copy(update={"draft": ProductDraft(), "awaiting_features": False})

    def set_awaiting_features(self, value: bool) -> "SessionState":
        return self.model_copy(update={"awaiting_features": value})

    def with_store(self, store: StoreData) -> "SessionState":
        return self.model_copy(update={"store": store})


class SessionStore:
    """
    Holds the current state of one session.

    `lock` allows one turn at a time; a turn reads `state`, computes the full
    next state and calls `commit` once.
    """

    def __init__(self, session_id: str, state: SessionState) -> None:
        self.session_id = session_id
        self._state = state
        self.lock = asyncio.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    def commit(self, state: SessionState) -> None:
        self._state = state


class SessionRegistry:
    """
    In-memory map of session id to SessionStore. Nothing is persisted.

    At most `max_sessions` are kept; creating one more evicts the oldest.
    """

    def __init__(self, max_sessions: int = 1000) -> None:
        self.max_sessions = max_sessions
        self._sessions: dict[str, SessionStore] = {}

    def create(self, state: SessionState) -> SessionStore:
        while self._sessions and len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info("Evicted session %s (limit %d)", oldest, self.max_sessions)
        session_id = uuid.uuid4().hex
        store = SessionStore(session_id, state)
        self._sessions[session_id] = store
        logger.info("Created session %s", session_id)
        return store

    def remove(self, session_id: str) -> None:
        """Forget a session. Raises SessionNotFoundError if it is unknown."""
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        logger.info("Removed session %s", session_id)

    def get(self, session_id: str) -> SessionStore:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(f"Session not found: {session_id}") from None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
