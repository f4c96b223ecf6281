"""Conversation layer: session state, command interpreter and the assistant service."""

from admin_assistant.conversation.interpreter import CommandInterpreter, TurnOutcome, derive_phase
from admin_assistant.conversation.models import (
    ConversationPhase,
    Message,
    MessageKind,
    Notice,
    ProductDraft,
    Sender,
    SuggestedAction,
)
from admin_assistant.conversation.service import AssistantService, build_assistant_service
from admin_assistant.conversation.session import SessionRegistry, SessionState, SessionStore

__all__ = [
    "AssistantService",
    "CommandInterpreter",
    "ConversationPhase",
    "Message",
    "MessageKind",
    "Notice",
    "ProductDraft",
    "Sender",
    "SessionRegistry",
    "SessionState",
    "SessionStore",
    "SuggestedAction",
    "TurnOutcome",
    "build_assistant_service",
    "derive_phase",
]
