"""Description generation flow."""

from pydantic import BaseModel, Field

from admin_assistant.flows.base import generation_errors
from admin_assistant.llm.completion import CompletionProvider, PromptTemplate

DEFAULT_TONE = "engaging"


class DescriptionRequest(BaseModel):
    """Inputs for a product description."""

    product_name: str = Field(min_length=1, description="The name of the product.")
    key_features: str = Field(
        description="Key features of the product, separated by commas or a short paragraph."
    )
    tone: str = Field(
        default=DEFAULT_TONE,
        description="Desired tone of the product description (e.g., professional, funny, exciting).",
    )
    target_keywords: list[str] | None = Field(
        default=None,
        description="Target keywords to include for SEO purposes. Integrate them naturally.",
    )
    existing_description: str | None = Field(
        default=None,
        description="An existing brief description (e.g., from image analysis) to expand upon.",
    )


class GeneratedDescription(BaseModel):
    description: str = Field(description="The generated product description.")


DESCRIPTION_INSTRUCTIONS = """You are an expert copywriter specializing in writing engaging and SEO-friendly product descriptions.
Generate a compelling product description for the given product.
Use the provided key features and desired tone.
"""


def render_description_prompt(request: DescriptionRequest) -> str:
    lines: list[str] = []
    if request.existing_description:
        lines.append(f"Expand upon this existing information: {request.existing_description}")
    if request.target_keywords:
        lines.append(
            "Naturally incorporate the following keywords for SEO: "
            f"{', '.join(request.target_keywords)}."
        )
    lines.extend(
        [
            f"Product Name: {request.product_name}",
            f"Key Features: {request.key_features}",
            f"Tone: {request.tone}",
            "",
            "Description:",
        ]
    )
    return "\n".join(lines)


DESCRIPTION_PROMPT: PromptTemplate[DescriptionRequest] = PromptTemplate(
    name="generate_product_description",
    instructions=DESCRIPTION_INSTRUCTIONS,
    render=render_description_prompt,
)


async def generate_product_description(
    provider: CompletionProvider,
    request: DescriptionRequest,
) -> GeneratedDescription:
    """Generate a product description; raises GenerationFailed when nothing usable comes back."""
    with generation_errors("Failed to generate product description from AI model."):
        return await provider.complete(
            DESCRIPTION_PROMPT,
            request,
            DescriptionRequest,
            GeneratedDescription,
        )
