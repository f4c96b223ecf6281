"""Conversation models: messages, suggested actions, the product draft and notices."""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer


class Sender(str, Enum):
    USER = "user"
    AGENT = "agent"


class MessageKind(str, Enum):
    """
    Tag telling the presentation layer how to render a message.

    Plain text messages (typed user text, the urgent-tasks summary) carry no tag.
    """

    WELCOME = "welcome"
    USER_IMAGE_UPLOAD = "user_image_upload"
    PRODUCT_LIST = "product_list"
    ADD_PRODUCT_FORM = "add_product_form"
    ORDERS_LIST = "orders_list"
    ANALYTICS_DASHBOARD = "analytics_dashboard"
    HELP = "help"
    DESCRIPTION_RESULT = "description_result"
    ERROR = "error"
    IMAGE_ANALYSIS_RESULT = "image_analysis_result"
    CONFIRM_PRODUCT_NAME = "confirm_product_name"
    REQUEST_FEATURES = "request_features"
    PRODUCT_ADDED_CONFIRMATION = "product_added_confirmation"
    AGENT_RESPONSE = "agent_response"
    PRODUCT_CARD = "product_card"


class ConversationPhase(str, Enum):
    """Where the conversation stands, derived once at the start of a turn."""

    IDLE = "idle"
    AWAITING_PRODUCT_NAME = "awaiting_product_name"
    AWAITING_FEATURES = "awaiting_features"
    AWAITING_MANUAL_DETAILS = "awaiting_manual_details"


ActionVariant = Literal["default", "outline", "secondary", "destructive"]


class SuggestedAction(BaseModel):
    """A one-click follow-up shown under a message."""

    model_config = ConfigDict(frozen=True)

    label: str
    action: str
    variant: ActionVariant = "default"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


def _thaw_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    return _thaw(payload)


# Read-only all the way down; serialized back to plain JSON objects and arrays.
FrozenPayload = Annotated[
    dict[str, Any],
    AfterValidator(_freeze),
    PlainSerializer(_thaw_payload),
]


class Message(BaseModel):
    """One entry in the conversation. Never modified after it is built."""

    model_config = ConfigDict(frozen=True)

    id: int
    sender: Sender
    kind: MessageKind | None = None
    timestamp: datetime
    text: str | None = None
    payload: FrozenPayload | None = None
    suggested_actions: tuple[SuggestedAction, ...] = ()


class ProductDraft(BaseModel):
    """Product being assembled across turns (image analysis, naming, description)."""

    model_config = ConfigDict(frozen=True)

    image_data_url: str | None = None
    category: str | None = None
    tags: tuple[str, ...] = ()
    initial_description: str | None = None
    product_name: str | None = None
    full_description: str | None = None

    @property
    def is_empty(self) -> bool:
        return self == ProductDraft()


class Notice(BaseModel):
    """Transient notification (toast) that is not part of the message history."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class ReplyDraft(BaseModel):
    """Agent reply before it is stamped with an id and timestamp."""

    kind: MessageKind | None
    text: str | None = None
    payload: dict[str, Any] | None = None
    suggested_actions: tuple[SuggestedAction, ...] = Field(default_factory=tuple)
