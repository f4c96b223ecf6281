"""Assistant service: the boundary the presentation layer talks to."""

import logging
from typing import TYPE_CHECKING

from admin_assistant.agents.catalog_agent import CatalogQueryAgent
from admin_assistant.conversation.interpreter import CommandInterpreter, TurnOutcome
from admin_assistant.conversation.models import Message, MessageKind, Sender
from admin_assistant.conversation.responses import WELCOME_ACTIONS, WELCOME_TEXT
from admin_assistant.conversation.session import SessionRegistry, SessionState, SessionStore
from admin_assistant.exceptions import CatalogAPIError, ConfigurationError, ValidationError
from admin_assistant.flows.next_steps import SuggestedStep, suggest_next_steps
from admin_assistant.integrations.base import CatalogSource
from admin_assistant.llm.completion import CompletionProvider, get_completion_provider_from_settings
from admin_assistant.models.catalog import ShopStatus
from admin_assistant.observability.context import session_context
from admin_assistant.store import LOW_STOCK_THRESHOLD, Product, StoreData, load_mock_store

if TYPE_CHECKING:
    from admin_assistant.config import Settings

logger = logging.getLogger(__name__)

RECENT_ACTIVITY = "Admin logged in. No major issues reported recently."
SHOP_INFO_MISSING = (
    "Could not retrieve Shopify store information. Ensure .env variables are correct "
    "and client initialized."
)


def describe_store_status(store: StoreData) -> str:
    """One-line store summary used as input to next-steps suggestions."""
    analytics = store.analytics
    low_stock = sum(1 for p in store.products if p.inventory < LOW_STOCK_THRESHOLD)
    return (
        f"Sales: ${analytics.today_sales}, Orders: {analytics.today_orders}, "
        f"Conversion: {analytics.conversion_rate}%. Top product: {analytics.top_product}. "
        f"{low_stock} products low on stock."
    )


class AssistantService:
    """
    Serializes turns per session and commits the interpreter's results.

    Each turn holds the session lock from reading the state until the new
    state is committed, so a session never runs two turns at once.
    """

    def __init__(
        self,
        interpreter: CommandInterpreter,
        provider: CompletionProvider,
        catalog: CatalogSource,
        registry: SessionRegistry | None = None,
        welcome_enabled: bool = True,
        max_suggested_steps: int = 4,
    ) -> None:
        self.interpreter = interpreter
        self.provider = provider
        self.catalog = catalog
        self.registry = registry or SessionRegistry()
        self.welcome_enabled = welcome_enabled
        self.max_suggested_steps = max_suggested_steps
        self.shop_status: ShopStatus | None = None

    def create_session(self, store: StoreData | None = None) -> SessionStore:
        """Start a conversation over a fresh copy of the mock store."""
        state = SessionState.initial(store)
        if self.welcome_enabled:
            state = state.append_message(
                Sender.AGENT,
                MessageKind.WELCOME,
                self.interpreter.now(),
                text=WELCOME_TEXT,
                suggested_actions=WELCOME_ACTIONS,
            )
        return self.registry.create(state)

    def end_session(self, session_id: str) -> None:
        """Drop a session and everything it holds."""
        self.registry.remove(session_id)

    def get_messages(self, session_id: str) -> tuple[Message, ...]:
        return self.registry.get(session_id).state.messages

    def get_products(self, session_id: str | None = None) -> tuple[Product, ...]:
        """Products of a session's store, or of the built-in store when no session is given."""
        if session_id is None:
            return load_mock_store().products
        return self.registry.get(session_id).state.store.products

    async def submit_text(
        self,
        session_id: str,
        text: str,
        image_data_uri: str | None = None,
    ) -> TurnOutcome:
        """
        Run one user turn. An attached image takes precedence over the text.

        Raises:
            SessionNotFoundError: Unknown session id.
            ValidationError: Neither text nor an image was supplied.
        """
        if not text.strip() and not image_data_uri:
            raise ValidationError("Message text or image is required")
        session = self.registry.get(session_id)
        async with session.lock:
            with session_context(session_id):
                if image_data_uri:
                    outcome = await self.interpreter.handle_image(session.state, image_data_uri, text)
                else:
                    outcome = await self.interpreter.handle_text(session.state, text)
                session.commit(outcome.state)
        return outcome

    async def invoke_action(self, session_id: str, action: str) -> TurnOutcome:
        """Run a quick action; an action that submits text appends the user message too."""
        if not action.strip():
            raise ValidationError("Action is required")
        session = self.registry.get(session_id)
        async with session.lock:
            with session_context(session_id):
                outcome = await self.interpreter.handle_action(session.state, action.strip())
                session.commit(outcome.state)
        return outcome

    async def check_shop_connection(self) -> ShopStatus:
        """Check the catalog connection and remember the result."""
        try:
            info = await self.catalog.shop_info()
        except (ConfigurationError, CatalogAPIError) as e:
            logger.warning("Shopify connection check failed: %s", e.message)
            status = ShopStatus(connected=False, error=e.message)
        else:
            if info is None:
                status = ShopStatus(connected=False, error=SHOP_INFO_MISSING)
            else:
                status = ShopStatus(connected=True, shop=info)
        self.shop_status = status
        return status

    async def suggest_next_steps(self, session_id: str | None = None) -> list[SuggestedStep]:
        """
        Suggest what the admin should do next.

        Failures are logged and produce an empty list.
        """
        if session_id is None:
            store = load_mock_store()
        else:
            store = self.registry.get(session_id).state.store
        try:
            result = await suggest_next_steps(
                self.provider,
                store_status=describe_store_status(store),
                recent_activity=RECENT_ACTIVITY,
            )
        except Exception:
            logger.exception("Failed to fetch next-step suggestions")
            return []
        return result.suggested_steps[: self.max_suggested_steps]

    async def close(self) -> None:
        await self.catalog.close()


def build_assistant_service(
    settings: "Settings | None" = None,
    catalog: CatalogSource | None = None,
    provider: CompletionProvider | None = None,
) -> AssistantService:
    """Wire the service from settings; catalog and provider may be supplied (tests)."""
    if settings is None:
        from admin_assistant.config import get_settings
        settings = get_settings()
    if catalog is None:
        from admin_assistant.integrations.shopify import get_shopify_client_from_settings
        catalog = get_shopify_client_from_settings(settings)
    vision_provider = None
    if provider is None:
        provider = get_completion_provider_from_settings(settings)
        if settings.llm_vision_model:
            vision_provider = CompletionProvider(
                model_name=settings.llm_vision_model,
                temperature=settings.llm_temperature,
                max_tokens=settings.llm_max_tokens,
            )

    interpreter = CommandInterpreter(
        provider=provider,
        catalog_agent=CatalogQueryAgent(provider, catalog),
        vision_provider=vision_provider,
    )
    return AssistantService(
        interpreter=interpreter,
        provider=provider,
        catalog=catalog,
        registry=SessionRegistry(max_sessions=settings.max_sessions),
        welcome_enabled=settings.session_welcome_enabled,
        max_suggested_steps=settings.max_suggested_steps,
    )
