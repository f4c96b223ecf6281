"""Tests for the completion provider adapter."""

import pytest
from pydantic import BaseModel, Field
from pydantic_ai import Tool
from pydantic_ai.exceptions import ModelAPIError, ModelHTTPError
from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart, ToolCallPart, ToolReturnPart
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from admin_assistant.exceptions import (
    CompletionError,
    ProviderUnavailable,
    ToolExecutionError,
    ValidationError,
)
from admin_assistant.llm.completion import (
    CompletionProvider,
    PromptTemplate,
    get_completion_provider_from_settings,
)


class EchoInput(BaseModel):
    text: str = Field(min_length=1)


class EchoOutput(BaseModel):
    answer: str


ECHO_PROMPT: PromptTemplate[EchoInput] = PromptTemplate(
    name="echo",
    instructions="Repeat the text.",
    render=lambda values: values.text,
)


def _has_tool_return(messages: list[ModelMessage]) -> bool:
    return any(isinstance(part, ToolReturnPart) for m in messages for part in m.parts)


class TestCompletionProvider:
    """Tests for CompletionProvider.complete."""

    @pytest.mark.asyncio
    async def test_returns_structured_output(self) -> None:
        """Output of the model run is validated against the output schema."""
        provider = CompletionProvider(model=TestModel(custom_output_args={"answer": "hello"}))

        result = await provider.complete(ECHO_PROMPT, {"text": "hello"}, EchoInput, EchoOutput)

        assert isinstance(result, EchoOutput)
        assert result.answer == "hello"

    @pytest.mark.asyncio
    async def test_invalid_input_never_calls_model(self) -> None:
        """Input failing the schema raises ValidationError before any model call."""
        calls: list[int] = []

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            calls.append(1)
            return ModelResponse(parts=[TextPart("unused")])

        provider = CompletionProvider(model=FunctionModel(model_fn))

        with pytest.raises(ValidationError) as exc_info:
            await provider.complete(ECHO_PROMPT, {"text": ""}, EchoInput, EchoOutput)

        assert exc_info.value.status_code == 400
        assert calls == []

    @pytest.mark.asyncio
    async def test_http_failure_is_provider_unavailable(self) -> None:
        """HTTP errors from the model API become ProviderUnavailable."""

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise ModelHTTPError(status_code=503, model_name="test-model", body="overloaded")

        provider = CompletionProvider(model=FunctionModel(model_fn))

        with pytest.raises(ProviderUnavailable) as exc_info:
            await provider.complete(ECHO_PROMPT, {"text": "hi"}, EchoInput, EchoOutput)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value, CompletionError)

    @pytest.mark.asyncio
    async def test_connection_failure_is_provider_unavailable(self) -> None:
        """A model API that cannot be reached is unavailable, not bad output."""

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise ModelAPIError(model_name="test-model", message="Connection error.")

        provider = CompletionProvider(model=FunctionModel(model_fn))

        with pytest.raises(ProviderUnavailable) as exc_info:
            await provider.complete(ECHO_PROMPT, {"text": "hi"}, EchoInput, EchoOutput)

        assert exc_info.value.status_code == 503
        assert "unreachable" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, ModelAPIError)

    @pytest.mark.asyncio
    async def test_unusable_output_is_completion_error(self) -> None:
        """A model that never produces structured output raises CompletionError."""

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            return ModelResponse(parts=[TextPart("I'd rather chat.")])

        provider = CompletionProvider(model=FunctionModel(model_fn))

        with pytest.raises(CompletionError) as exc_info:
            await provider.complete(ECHO_PROMPT, {"text": "hi"}, EchoInput, EchoOutput)

        assert not isinstance(exc_info.value, ProviderUnavailable)

    @pytest.mark.asyncio
    async def test_tool_results_feed_final_output(self) -> None:
        """The model may call tools before answering; only the final output is returned."""
        seen: list[str] = []

        async def lookup_word() -> str:
            """Return the secret word."""
            seen.append("called")
            return "plum"

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            if not _has_tool_return(messages):
                return ModelResponse(parts=[ToolCallPart(tool_name="lookup_word", args={})])
            return ModelResponse(
                parts=[ToolCallPart(tool_name=info.output_tools[0].name, args={"answer": "plum"})]
            )

        provider = CompletionProvider(model=FunctionModel(model_fn))

        result = await provider.complete(
            ECHO_PROMPT,
            {"text": "secret?"},
            EchoInput,
            EchoOutput,
            tools=[Tool(lookup_word, takes_ctx=False)],
        )

        assert result.answer == "plum"
        assert seen == ["called"]

    @pytest.mark.asyncio
    async def test_tool_execution_error_propagates_unchanged(self) -> None:
        """A ToolExecutionError raised by a tool is not re-wrapped."""

        async def broken_lookup() -> str:
            """Always fails."""
            raise ToolExecutionError("Failed to list Shopify products: boom")

        def model_fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            return ModelResponse(parts=[ToolCallPart(tool_name="broken_lookup", args={})])

        provider = CompletionProvider(model=FunctionModel(model_fn))

        with pytest.raises(ToolExecutionError, match="boom"):
            await provider.complete(
                ECHO_PROMPT,
                {"text": "hi"},
                EchoInput,
                EchoOutput,
                tools=[Tool(broken_lookup, takes_ctx=False)],
            )

    def test_model_id_from_name(self) -> None:
        """Without a model instance the Anthropic model id is used."""
        provider = CompletionProvider(model_name="claude-haiku-4-5")
        assert provider.model == "anthropic:claude-haiku-4-5"

    def test_provider_from_settings(self) -> None:
        """Settings choose the model name."""
        from admin_assistant.config import Settings

        settings = Settings(llm_model="claude-opus-4-1", _env_file=None)
        provider = get_completion_provider_from_settings(settings)
        assert provider.model == "anthropic:claude-opus-4-1"
