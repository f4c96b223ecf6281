"""API routes for the admin assistant."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from admin_assistant.conversation.interpreter import TurnOutcome
from admin_assistant.conversation.models import Message, Notice
from admin_assistant.conversation.service import AssistantService
from admin_assistant.flows.next_steps import SuggestedStep
from admin_assistant.models.catalog import ShopStatus
from admin_assistant.store import Product

router = APIRouter()


def get_service(request: Request) -> AssistantService:
    """Get the assistant service created at startup."""
    service: AssistantService | None = getattr(request.app.state, "assistant", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Assistant not initialized")
    return service


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    shop_connected: bool | None = None


class SessionResponse(BaseModel):
    """A newly created conversation."""

    session_id: str
    messages: list[Message]


class SubmitMessageRequest(BaseModel):
    """A user turn: typed text, optionally with a product image."""

    text: str = Field(default="", description="What the admin typed")
    image_data_uri: str | None = Field(
        default=None,
        description="Optional product image as data:<mimetype>;base64,<data>",
    )

    model_config = {"json_schema_extra": {"examples": [
        {"text": "show dashboard"},
        {"text": "shopify: list 3 products"},
    ]}}


class InvokeActionRequest(BaseModel):
    action: str = Field(description="Action id from a message's suggested actions")


class TurnResponse(BaseModel):
    """Messages added by the turn plus any transient notices."""

    messages: list[Message]
    notices: list[Notice]

    @classmethod
    def from_outcome(cls, outcome: TurnOutcome) -> "TurnResponse":
        return cls(messages=list(outcome.messages), notices=list(outcome.notices))


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health_check(service: AssistantService = Depends(get_service)) -> HealthResponse:
    from admin_assistant.config import get_settings

    settings = get_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        version=settings.api_version,
        shop_connected=service.shop_status.connected if service.shop_status else None,
    )


@router.post("/v1/sessions", response_model=SessionResponse, status_code=201)
async def create_session(service: AssistantService = Depends(get_service)) -> SessionResponse:
    """Start a conversation seeded with the welcome message."""
    session = service.create_session()
    return SessionResponse(session_id=session.session_id, messages=list(session.state.messages))


@router.delete("/v1/sessions/{session_id}", status_code=204, response_class=Response)
async def end_session(
    session_id: str,
    service: AssistantService = Depends(get_service),
) -> Response:
    """End a conversation and free its state."""
    service.end_session(session_id)
    return Response(status_code=204)


@router.get("/v1/sessions/{session_id}/messages", response_model=list[Message])
async def list_messages(
    session_id: str,
    service: AssistantService = Depends(get_service),
) -> list[Message]:
    return list(service.get_messages(session_id))


@router.post(
    "/v1/sessions/{session_id}/messages",
    response_model=TurnResponse,
    summary="Submit a user turn",
)
async def submit_message(
    session_id: str,
    body: SubmitMessageRequest,
    service: AssistantService = Depends(get_service),
) -> TurnResponse:
    """
    Submit text (and optionally an image) to the assistant.

    Flow failures come back as `error` messages with status 200.
    """
    outcome = await service.submit_text(session_id, body.text, body.image_data_uri)
    return TurnResponse.from_outcome(outcome)


@router.post(
    "/v1/sessions/{session_id}/actions",
    response_model=TurnResponse,
    summary="Invoke a suggested action",
)
async def invoke_action(
    session_id: str,
    body: InvokeActionRequest,
    service: AssistantService = Depends(get_service),
) -> TurnResponse:
    outcome = await service.invoke_action(session_id, body.action)
    return TurnResponse.from_outcome(outcome)


@router.get("/v1/shop/status", response_model=ShopStatus, summary="Shopify connection status")
async def shop_status(service: AssistantService = Depends(get_service)) -> ShopStatus:
    """Re-check the Shopify connection."""
    return await service.check_shop_connection()


@router.get("/v1/suggestions", response_model=list[SuggestedStep], summary="Next-step suggestions")
async def suggestions(
    session_id: str | None = None,
    service: AssistantService = Depends(get_service),
) -> list[SuggestedStep]:
    return await service.suggest_next_steps(session_id)


@router.get("/v1/store/products", response_model=list[Product], summary="Mock store products")
async def store_products(
    session_id: str | None = None,
    service: AssistantService = Depends(get_service),
) -> list[Product]:
    return list(service.get_products(session_id))
