"""Next-steps suggestion flow for the admin dashboard."""

from pydantic import BaseModel, Field

from admin_assistant.flows.base import generation_errors
from admin_assistant.llm.completion import CompletionProvider, PromptTemplate


class NextStepsInput(BaseModel):
    store_status: str = Field(
        description=(
            "The current status of the store, including metrics like sales, inventory "
            "levels, and customer engagement."
        )
    )
    recent_activity: str = Field(
        description="A summary of recent admin activity and notable events in the store."
    )


class SuggestedStep(BaseModel):
    step: str = Field(description="A suggested action for the administrator.")
    reason: str = Field(description="The reason why this step is suggested.")


class NextStepsResult(BaseModel):
    suggested_steps: list[SuggestedStep] = Field(
        default_factory=list,
        description="A list of suggested next steps for the administrator.",
    )


NEXT_STEPS_INSTRUCTIONS = """You are an AI assistant helping ecommerce store administrators manage their stores effectively.

Based on the current store status and recent activity, suggest relevant next steps for the administrator.
Provide a list of suggested steps with clear reasons for each suggestion.

Consider suggesting actions related to:
- Addressing low inventory
- Processing pending orders
- Improving customer engagement
- Optimizing product pricing
- Reviewing marketing campaign performance
- Checking low inventory alerts
- Reviewing customer feedback
- Improving product discoverability
"""

NEXT_STEPS_PROMPT: PromptTemplate[NextStepsInput] = PromptTemplate(
    name="suggest_next_steps",
    instructions=NEXT_STEPS_INSTRUCTIONS,
    render=lambda values: (
        f"Store Status: {values.store_status}\nRecent Activity: {values.recent_activity}"
    ),
)


async def suggest_next_steps(
    provider: CompletionProvider,
    store_status: str,
    recent_activity: str,
) -> NextStepsResult:
    """Suggest next steps. The result is not truncated here; callers decide how many to show."""
    with generation_errors("Failed to suggest next steps from AI model."):
        return await provider.complete(
            NEXT_STEPS_PROMPT,
            {"store_status": store_status, "recent_activity": recent_activity},
            NextStepsInput,
            NextStepsResult,
        )
