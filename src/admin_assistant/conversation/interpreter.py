"""
Command interpreter: routes one user turn to the right flow and returns the next state.

The interpreter never mutates a SessionState. Each public method takes the state
as it was at the start of the turn and returns a TurnOutcome holding the new
state, the messages added during the turn and any transient notices. Failures
in flows or the agent become in-band error messages; nothing escapes a turn.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from admin_assistant.agents.catalog_agent import CatalogQueryAgent
from admin_assistant.conversation import responses
from admin_assistant.conversation.models import (
    ConversationPhase,
    Message,
    MessageKind,
    Notice,
    ProductDraft,
    ReplyDraft,
    Sender,
)
from admin_assistant.conversation.session import SessionState
from admin_assistant.flows.image_analysis import analyze_product_image
from admin_assistant.flows.product_description import (
    DEFAULT_TONE,
    DescriptionRequest,
    generate_product_description,
)
from admin_assistant.llm.completion import CompletionProvider
from admin_assistant.observability.logging import LogContext
from admin_assistant.observability.metrics import record_turn
from admin_assistant.observability.tracing import add_span_attribute, pipeline_span
from admin_assistant.store import Product, StoreData

logger = logging.getLogger(__name__)

# "name; features; tone" typed after an add-product prompt.
MANUAL_DETAILS_PATTERN = re.compile(r"([\w\s\-_'\"]+)\s*;\s*([\w\s\-_,'\"()]+)\s*;\s*([\w\s]+)")

DEFAULT_PRICE = 19.99
DEFAULT_INVENTORY = 10
DEFAULT_CATEGORY = "Uncategorized"
NO_DESCRIPTION = "No description yet."

PASSTHROUGH_ACTION_PREFIXES = ("show_", "view_", "add_", "filter_", "process_")
NAVIGATION_ACTIONS = {
    "dashboard": "Show dashboard",
    "products": "List products",
    "orders": "Show orders",
}
EDIT_PRODUCT_ACTION_PREFIX = "edit_product_"


@dataclass(frozen=True)
class TurnOutcome:
    """Result of one turn: the state to commit plus what the turn produced."""

    state: SessionState
    messages: tuple[Message, ...] = ()
    notices: tuple[Notice, ...] = ()


def derive_phase(state: SessionState) -> ConversationPhase:
    """Work out which multi-turn flow, if any, the next text turn continues."""
    last = state.last_agent_message
    last_kind = last.kind if last else None
    if last_kind == MessageKind.IMAGE_ANALYSIS_RESULT and state.draft.image_data_url:
        return ConversationPhase.AWAITING_PRODUCT_NAME
    if state.awaiting_features and state.draft.product_name:
        return ConversationPhase.AWAITING_FEATURES
    if last_kind in (MessageKind.ADD_PRODUCT_FORM, MessageKind.REQUEST_FEATURES):
        return ConversationPhase.AWAITING_MANUAL_DETAILS
    return ConversationPhase.IDLE


def action_to_text(action: str) -> str:
    """Text submitted on the user's behalf for a generic quick action."""
    if action.startswith(PASSTHROUGH_ACTION_PREFIXES):
        return action.replace("_", " ")
    return NAVIGATION_ACTIONS.get(action, action)


def build_product(store: StoreData, draft: ProductDraft, now: datetime) -> Product:
    """Turn a named draft into a store product with default price and stock."""
    tags = f"Tags: {', '.join(draft.tags)}\n\n" if draft.tags else ""
    body = draft.full_description or draft.initial_description or NO_DESCRIPTION
    millis = str(int(now.timestamp()) * 1000 + now.microsecond // 1000)
    return Product(
        id=store.next_product_id(),
        name=draft.product_name,
        price=DEFAULT_PRICE,
        inventory=DEFAULT_INVENTORY,
        status="active",
        sales=0,
        image=draft.image_data_url or responses.PLACEHOLDER_PRODUCT_IMAGE,
        sku=f"SKU-{millis[-5:]}",
        category=draft.category or DEFAULT_CATEGORY,
        description=f"{tags}{body}",
    )


class CommandInterpreter:
    """
    Conversation state machine over text turns, image uploads and quick actions.

    Priority for a text turn (first match wins): catalog query prefix, pending
    product name, pending features, fixed intents, help.
    """

    def __init__(
        self,
        provider: CompletionProvider,
        catalog_agent: CatalogQueryAgent,
        vision_provider: CompletionProvider | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Args:
            provider: Completion provider for text flows.
            catalog_agent: Agent answering `shopify:` queries.
            vision_provider: Provider for image analysis (defaults to provider).
            clock: Returns the current time; injectable for tests.
        """
        self.provider = provider
        self.catalog_agent = catalog_agent
        self.vision_provider = vision_provider or provider
        self._clock = clock or (lambda: datetime.now(UTC))

    def now(self) -> datetime:
        return self._clock()

    def _append_reply(self, state: SessionState, reply: ReplyDraft) -> SessionState:
        return state.append_message(
            Sender.AGENT,
            reply.kind,
            self.now(),
            text=reply.text,
            payload=reply.payload,
            suggested_actions=reply.suggested_actions,
        )

    @staticmethod
    def _outcome(
        before: SessionState,
        after: SessionState,
        notices: tuple[Notice, ...] = (),
    ) -> TurnOutcome:
        return TurnOutcome(
            state=after,
            messages=after.messages[len(before.messages):],
            notices=notices,
        )

    async def handle_text(self, state: SessionState, text: str) -> TurnOutcome:
        """Process a typed message (or one submitted on the user's behalf)."""
        text = text.strip()
        phase = derive_phase(state)
        with pipeline_span("interpreter.text_turn", phase=phase.value):
            next_state = state.append_message(
                Sender.USER,
                None,
                self.now(),
                text=text,
                payload={"text": text},
            )
            next_state, reply, branch = await self._route_text(next_state, text, phase)
            add_span_attribute("turn.branch", branch)
        record_turn(branch)
        logger.info("Text turn handled: phase=%s branch=%s", phase.value, branch)
        return self._outcome(state, self._append_reply(next_state, reply))

    async def _route_text(
        self,
        state: SessionState,
        text: str,
        phase: ConversationPhase,
    ) -> tuple[SessionState, ReplyDraft, str]:
        command = text.lower()

        if command.startswith(responses.CATALOG_QUERY_PREFIX):
            query = text[len(responses.CATALOG_QUERY_PREFIX):].strip()
            if not query:
                return state, responses.empty_catalog_query_reply(), "catalog_query_empty"
            reply = await self.catalog_agent.query(query)
            return state, responses.agent_reply(reply), "catalog_query"

        if phase is ConversationPhase.AWAITING_PRODUCT_NAME:
            state = state.update_draft(product_name=text)
            return state, responses.confirm_product_name_reply(text, state.draft), "product_name"

        if phase is ConversationPhase.AWAITING_FEATURES:
            return await self._describe_draft(state.set_awaiting_features(False), text)

        if "dashboard" in command or "overview" in command or "stats" in command:
            return state, responses.dashboard_reply(state.store), "dashboard"

        if "product" in command and ("list" in command or "show" in command or "all" in command):
            return state, responses.product_list_reply(state.store), "product_list"

        if (("add" in command or "create" in command) and "product" in command) or (
            command == "manual_product_form"
        ):
            return state, responses.add_product_form_reply(), "add_product_form"

        if phase is ConversationPhase.AWAITING_MANUAL_DETAILS:
            match = MANUAL_DETAILS_PATTERN.search(text)
            if match:
                name, features, tone = (part.strip() for part in match.groups())
                return await self._describe_manual(state, name, features, tone)

        if "order" in command or "sale" in command:
            return state, responses.orders_reply(state.store), "orders"

        if "urgent" in command or "task" in command:
            return state, responses.urgent_tasks_reply(state.store), "urgent_tasks"

        return state, responses.help_reply(), "help"

    async def _generate_description(self, **fields: object) -> str | None:
        """Run description generation; None means it failed (already logged)."""
        try:
            result = await generate_product_description(self.provider, DescriptionRequest(**fields))
        except Exception:
            logger.exception("Error generating product description")
            return None
        return result.description

    async def _describe_draft(
        self,
        state: SessionState,
        features: str,
    ) -> tuple[SessionState, ReplyDraft, str]:
        draft = state.draft
        keywords = [kw.strip() for kw in features.split(",") if kw.strip()]
        description = await self._generate_description(
            product_name=draft.product_name,
            key_features=features,
            tone=DEFAULT_TONE,
            target_keywords=keywords,
            existing_description=draft.initial_description,
        )
        if description is None:
            return state, responses.error_reply(responses.DESCRIPTION_FAILED_TEXT), "description_error"
        state = state.update_draft(full_description=description)
        reply = responses.draft_description_reply(draft.product_name, description, draft)
        return state, reply, "draft_description"

    async def _describe_manual(
        self,
        state: SessionState,
        product_name: str,
        features: str,
        tone: str,
    ) -> tuple[SessionState, ReplyDraft, str]:
        description = await self._generate_description(
            product_name=product_name,
            key_features=features,
            tone=tone,
        )
        if description is None:
            return state, responses.error_reply(responses.DESCRIPTION_FAILED_TEXT), "description_error"
        state = state.update_draft(product_name=product_name, full_description=description)
        return state, responses.manual_description_reply(product_name, description), "manual_description"

    async def handle_image(
        self,
        state: SessionState,
        image_data_uri: str,
        text: str = "",
    ) -> TurnOutcome:
        """
        Analyze an uploaded product image and start a new draft from it.

        Any unfinished draft is replaced. The text sent with the image is
        recorded on the user message but not interpreted.
        """
        text = text.strip()
        with pipeline_span("interpreter.image_turn"):
            next_state = state.append_message(
                Sender.USER,
                MessageKind.USER_IMAGE_UPLOAD,
                self.now(),
                text=text or None,
                payload={"image_data_url": image_data_uri, "text": text},
            )
            try:
                analysis = await analyze_product_image(self.vision_provider, image_data_uri)
            except Exception:
                logger.exception("Error analyzing product image")
                reply = responses.error_reply(responses.IMAGE_ANALYSIS_FAILED_TEXT)
                branch = "image_analysis_error"
            else:
                draft = ProductDraft(
                    image_data_url=image_data_uri,
                    category=analysis.category,
                    tags=tuple(analysis.tags),
                    initial_description=analysis.initial_description,
                )
                next_state = next_state.clear_draft().replace_draft(draft)
                reply = responses.image_analysis_reply(analysis, image_data_uri)
                branch = "image_analysis"
        record_turn(branch)
        return self._outcome(state, self._append_reply(next_state, reply))

    def commit_draft(self, state: SessionState) -> TurnOutcome:
        """Add the named draft to the store as a new product."""
        draft = state.draft
        if not draft.product_name:
            notice = Notice(
                title="Missing Product Name",
                description="Cannot add product without a name.",
                variant="destructive",
            )
            return TurnOutcome(state=state, notices=(notice,))

        product = build_product(state.store, draft, self.now())
        next_state = state.with_store(state.store.with_product(product))
        next_state = self._append_reply(next_state, responses.product_added_reply(product))
        next_state = next_state.clear_draft()
        record_turn("commit_product")
        logger.info("Added product %s (%s) from draft", product.id, product.name)
        notice = Notice(
            title="Product Added!",
            description=f"{product.name} is now in your catalog.",
        )
        return self._outcome(state, next_state, (notice,))

    def request_features(self, state: SessionState) -> TurnOutcome:
        """Ask for key features; the next text turn generates the full description."""
        next_state = state.set_awaiting_features(True)
        next_state = self._append_reply(
            next_state, responses.request_features_reply(state.draft.product_name)
        )
        return self._outcome(state, next_state)

    async def handle_action(self, state: SessionState, action: str) -> TurnOutcome:
        """Dispatch a quick action chosen from a message's suggested actions."""
        with LogContext(action=action):
            logger.info("Dispatching quick action")
            return await self._dispatch_action(state, action)

    async def _dispatch_action(self, state: SessionState, action: str) -> TurnOutcome:
        if action == "add_product_from_context":
            return self.commit_draft(state)
        if action == "request_features_for_description_context":
            return self.request_features(state)
        if action == "ai_product_description_prompt":
            next_state = self._append_reply(state, responses.ai_description_prompt_reply())
            return self._outcome(state, next_state)
        if action == "ask_shopify_list_products":
            return await self.handle_text(state, "shopify: list products")
        if action == "ask_shopify_list_3_products":
            return await self.handle_text(state, "shopify: list 3 products")
        if action == "ask_shopify_list_orders":
            notice = Notice(title="Shopify Orders", description="Order tools are not yet implemented.")
            return TurnOutcome(state=state, notices=(notice,))
        if action == "trigger_image_upload_for_product":
            notice = Notice(
                title="Upload Image",
                description="Attach a product image to your next message to analyze it.",
            )
            return TurnOutcome(state=state, notices=(notice,))
        if action.startswith(EDIT_PRODUCT_ACTION_PREFIX):
            product_id = action[len(EDIT_PRODUCT_ACTION_PREFIX):]
            outcome = await self.handle_text(state, f"show product {product_id} details")
            notice = Notice(
                title="Edit Product",
                description=f"Navigating to edit product {product_id} (mock action)",
            )
            return TurnOutcome(
                state=outcome.state,
                messages=outcome.messages,
                notices=(notice, *outcome.notices),
            )
        return await self.handle_text(state, action_to_text(action))
