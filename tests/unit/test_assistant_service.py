"""Tests for the assistant service boundary."""

import asyncio

import pytest

from admin_assistant.agents.catalog_agent import CatalogQueryAgent
from admin_assistant.config import Settings
from admin_assistant.conversation.interpreter import CommandInterpreter
from admin_assistant.conversation.models import MessageKind, Sender
from admin_assistant.conversation.service import (
    AssistantService,
    build_assistant_service,
    describe_store_status,
)
from admin_assistant.exceptions import (
    CatalogAPIError,
    ConfigurationError,
    GenerationFailed,
    SessionNotFoundError,
    ValidationError,
)
from admin_assistant.flows.next_steps import NextStepsResult, SuggestedStep
from admin_assistant.store import load_mock_store


@pytest.fixture
def service(scripted_provider, fake_catalog, fixed_clock) -> AssistantService:
    interpreter = CommandInterpreter(
        scripted_provider,
        CatalogQueryAgent(scripted_provider, fake_catalog),
        clock=fixed_clock,
    )
    return AssistantService(interpreter, scripted_provider, fake_catalog)


def _steps(count: int) -> NextStepsResult:
    return NextStepsResult(
        suggested_steps=[SuggestedStep(step=f"Step {i}", reason=f"Reason {i}") for i in range(count)]
    )


class TestDescribeStoreStatus:
    def test_mock_store_summary(self) -> None:
        assert describe_store_status(load_mock_store()) == (
            "Sales: $12450.5, Orders: 18, Conversion: 3.2%. "
            "Top product: Premium Phone Case. 1 products low on stock."
        )


class TestSessions:
    """Tests for session creation and lookup."""

    def test_session_starts_with_welcome(self, service: AssistantService) -> None:
        session = service.create_session()

        (welcome,) = session.state.messages
        assert welcome.sender == Sender.AGENT
        assert welcome.kind == MessageKind.WELCOME
        assert [a.action for a in welcome.suggested_actions] == [
            "show_dashboard",
            "show_products",
            "show_urgent_tasks",
            "ask_shopify_list_3_products",
        ]

    def test_welcome_can_be_disabled(self, service: AssistantService) -> None:
        service.welcome_enabled = False
        assert service.create_session().state.messages == ()

    def test_unknown_session(self, service: AssistantService) -> None:
        with pytest.raises(SessionNotFoundError) as exc_info:
            service.get_messages("nope")
        assert exc_info.value.status_code == 404

    def test_products_without_session_use_mock_store(self, service: AssistantService) -> None:
        assert service.get_products() == load_mock_store().products


class TestSubmitText:
    """Tests for submit_text and invoke_action."""

    @pytest.mark.asyncio
    async def test_turn_is_committed(self, service: AssistantService) -> None:
        session = service.create_session()

        outcome = await service.submit_text(session.session_id, "show orders")

        assert [m.kind for m in outcome.messages] == [None, MessageKind.ORDERS_LIST]
        assert service.get_messages(session.session_id) == outcome.state.messages
        assert len(outcome.state.messages) == 3

    @pytest.mark.asyncio
    async def test_empty_turn_rejected(self, service: AssistantService) -> None:
        session = service.create_session()

        with pytest.raises(ValidationError):
            await service.submit_text(session.session_id, "   ")

        assert len(service.get_messages(session.session_id)) == 1

    @pytest.mark.asyncio
    async def test_image_takes_precedence(
        self, service: AssistantService, scripted_provider, png_data_uri: str
    ) -> None:
        scripted_provider.outputs["analyze_product_image"] = GenerationFailed("nothing")
        session = service.create_session()

        outcome = await service.submit_text(session.session_id, "show dashboard", png_data_uri)

        assert outcome.messages[0].kind == MessageKind.USER_IMAGE_UPLOAD
        assert outcome.messages[0].text == "show dashboard"
        assert outcome.messages[-1].kind == MessageKind.ERROR
        assert scripted_provider.prompt_names() == ["analyze_product_image"]

    @pytest.mark.asyncio
    async def test_committed_product_is_session_local(self, service: AssistantService) -> None:
        first = service.create_session()
        second = service.create_session()
        session = service.registry.get(first.session_id)
        session.commit(session.state.update_draft(product_name="Gift Card"))

        await service.invoke_action(first.session_id, "add_product_from_context")

        assert len(service.get_products(first.session_id)) == 6
        assert len(service.get_products(second.session_id)) == 5

    @pytest.mark.asyncio
    async def test_turns_in_one_session_are_serialized(self, service: AssistantService) -> None:
        session = service.create_session()

        await asyncio.gather(
            service.submit_text(session.session_id, "show orders"),
            service.submit_text(session.session_id, "show dashboard"),
        )

        ids = [m.id for m in service.get_messages(session.session_id)]
        assert ids == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_blank_action_rejected(self, service: AssistantService) -> None:
        session = service.create_session()
        with pytest.raises(ValidationError):
            await service.invoke_action(session.session_id, " ")


class TestShopConnection:
    @pytest.mark.asyncio
    async def test_connected(self, service: AssistantService) -> None:
        status = await service.check_shop_connection()

        assert status.connected is True
        assert status.shop.name == "Test Shop"
        assert service.shop_status is status

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("Shopify shop domain is not configured"),
            CatalogAPIError("Shopify API request failed"),
        ],
    )
    async def test_failure_is_reported(self, service: AssistantService, fake_catalog, error) -> None:
        fake_catalog.error = error

        status = await service.check_shop_connection()

        assert status.connected is False
        assert status.error == error.message

    @pytest.mark.asyncio
    async def test_missing_shop_info(self, service: AssistantService, fake_catalog) -> None:
        fake_catalog.shop = None

        status = await service.check_shop_connection()

        assert status.connected is False
        assert "Could not retrieve Shopify store information" in status.error


class TestNextSteps:
    @pytest.mark.asyncio
    async def test_truncated_to_max(self, service: AssistantService, scripted_provider) -> None:
        scripted_provider.outputs["suggest_next_steps"] = _steps(6)

        steps = await service.suggest_next_steps()

        assert [s.step for s in steps] == ["Step 0", "Step 1", "Step 2", "Step 3"]
        _, values = scripted_provider.calls[-1]
        assert values["store_status"].startswith("Sales: $12450.5")

    @pytest.mark.asyncio
    async def test_failure_returns_empty(self, service: AssistantService, scripted_provider) -> None:
        scripted_provider.outputs["suggest_next_steps"] = GenerationFailed("bad output")

        assert await service.suggest_next_steps() == []

    @pytest.mark.asyncio
    async def test_close_closes_catalog(self, service: AssistantService, fake_catalog) -> None:
        await service.close()
        assert fake_catalog.closed is True


class TestBuildAssistantService:
    def test_injected_dependencies(self, scripted_provider, fake_catalog) -> None:
        settings = Settings(max_suggested_steps=2, session_welcome_enabled=False, _env_file=None)

        service = build_assistant_service(settings, catalog=fake_catalog, provider=scripted_provider)

        assert service.catalog is fake_catalog
        assert service.interpreter.vision_provider is scripted_provider
        assert service.max_suggested_steps == 2
        assert service.registry.max_sessions == 1000
        assert service.welcome_enabled is False
