"""Completion provider adapter: schema-checked prompt runs over Pydantic AI agents."""

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import httpx
import pydantic
from pydantic import BaseModel
from pydantic_ai import Agent, Tool
from pydantic_ai.exceptions import (
    AgentRunError,
    ModelAPIError,
    ModelHTTPError,
    UnexpectedModelBehavior,
)
from pydantic_ai.messages import UserContent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from admin_assistant.exceptions import (
    CompletionError,
    ProviderUnavailable,
    ToolExecutionError,
    ValidationError,
)
from admin_assistant.observability.metrics import record_completion_call
from admin_assistant.observability.tracing import pipeline_span

if TYPE_CHECKING:
    from admin_assistant.config import Settings

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)

UserPrompt = str | Sequence[UserContent]


@dataclass(frozen=True)
class PromptTemplate(Generic[InputT]):
    """A named prompt: system instructions plus a renderer for the user turn."""

    name: str
    instructions: str
    render: Callable[[InputT], UserPrompt]


class CompletionProvider:
    """
    Single integration point between the prompt flows and the generative model.

    Every call validates its input against the declared input schema before the
    model is contacted, then runs a one-shot Pydantic AI agent whose output type
    is the declared output schema. When tools are supplied the model may call
    them any number of times; only the final output is returned.
    """

    def __init__(
        self,
        model: Model | str | None = None,
        *,
        model_name: str = "claude-sonnet-4-5",
        temperature: float = 0.3,
        max_tokens: int = 1024,
    ) -> None:
        """
        Initialize the provider.

        Args:
            model: Optional model instance (e.g. TestModel) or full model id.
                   If provided, model_name is ignored.
            model_name: Anthropic model to use.
            temperature: Sampling temperature.
            max_tokens: Max tokens for the final answer.
        """
        self._model = model if model is not None else f"anthropic:{model_name}"
        self._model_settings = ModelSettings(temperature=temperature, max_tokens=max_tokens)

    @property
    def model(self) -> Model | str:
        return self._model

    async def complete(
        self,
        prompt: PromptTemplate[InputT],
        input_values: InputT | Mapping[str, Any],
        input_schema: type[InputT],
        output_schema: type[OutputT],
        tools: Sequence[Tool[Any]] | None = None,
        deps: Any = None,
    ) -> OutputT:
        """
        Run a prompt and return its structured output.

        Raises:
            ValidationError: input_values does not satisfy input_schema.
            ProviderUnavailable: the model API could not be reached or failed.
            CompletionError: the model produced no output matching output_schema.
            ToolExecutionError: a tool failed while the model was using it.
        """
        validated = self._validate_input(prompt.name, input_values, input_schema)

        agent: Agent[Any, OutputT] = Agent(
            self._model,
            name=prompt.name,
            deps_type=type(deps),
            output_type=output_schema,
            system_prompt=prompt.instructions,
            tools=list(tools or ()),
            model_settings=self._model_settings,
        )

        start = time.perf_counter()
        status = "success"
        try:
            with pipeline_span("completion", prompt=prompt.name, tools=len(tools or ())):
                result = await agent.run(prompt.render(validated), deps=deps)
        except ToolExecutionError:
            status = "tool_error"
            raise
        except ModelHTTPError as e:
            status = "unavailable"
            raise ProviderUnavailable(
                f"Completion provider returned HTTP {e.status_code} for '{prompt.name}'",
                detail=str(e),
            ) from e
        except ModelAPIError as e:
            status = "unavailable"
            raise ProviderUnavailable(
                f"Completion provider unreachable for '{prompt.name}'",
                detail=str(e),
            ) from e
        except (httpx.HTTPError, OSError) as e:
            status = "unavailable"
            raise ProviderUnavailable(
                f"Completion provider unreachable for '{prompt.name}'",
                detail=str(e),
            ) from e
        except UnexpectedModelBehavior as e:
            status = "invalid_output"
            raise CompletionError(
                f"Model output for '{prompt.name}' did not match the expected schema",
                detail=str(e),
            ) from e
        except AgentRunError as e:
            status = "invalid_output"
            raise CompletionError(f"Completion for '{prompt.name}' failed", detail=str(e)) from e
        finally:
            duration = time.perf_counter() - start
            record_completion_call(prompt.name, duration, status)
            logger.debug("Completion '%s' finished in %.2fs (%s)", prompt.name, duration, status)

        return self._validate_output(prompt.name, result.output, output_schema)

    @staticmethod
    def _validate_input(
        prompt_name: str,
        input_values: BaseModel | Mapping[str, Any],
        input_schema: type[InputT],
    ) -> InputT:
        if isinstance(input_values, BaseModel):
            input_values = input_values.model_dump()
        try:
            return input_schema.model_validate(input_values)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid input for prompt '{prompt_name}'",
                detail=str(e),
            ) from e

    @staticmethod
    def _validate_output(prompt_name: str, output: Any, output_schema: type[OutputT]) -> OutputT:
        if output is None:
            raise CompletionError(f"Model returned no output for '{prompt_name}'")
        if isinstance(output, BaseModel):
            output = output.model_dump()
        try:
            return output_schema.model_validate(output)
        except pydantic.ValidationError as e:
            raise CompletionError(
                f"Model output for '{prompt_name}' did not match the expected schema",
                detail=str(e),
            ) from e


def get_completion_provider_from_settings(settings: "Settings | None" = None) -> CompletionProvider:
    """Build the default provider from application settings."""
    if settings is None:
        from admin_assistant.config import get_settings
        settings = get_settings()
    return CompletionProvider(
        model_name=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
