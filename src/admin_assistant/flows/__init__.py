"""Single-turn generation flows."""

from admin_assistant.flows.image_analysis import (
    ImageAnalysisInput,
    ImageAnalysisResult,
    analyze_product_image,
)
from admin_assistant.flows.next_steps import (
    NextStepsInput,
    NextStepsResult,
    SuggestedStep,
    suggest_next_steps,
)
from admin_assistant.flows.product_description import (
    DescriptionRequest,
    GeneratedDescription,
    generate_product_description,
)

__all__ = [
    "DescriptionRequest",
    "GeneratedDescription",
    "ImageAnalysisInput",
    "ImageAnalysisResult",
    "NextStepsInput",
    "NextStepsResult",
    "SuggestedStep",
    "analyze_product_image",
    "generate_product_description",
    "suggest_next_steps",
]
