"""Image analysis flow: suggest a category, tags and a short description from a product photo."""

import base64
import binascii
import logging
import re

from pydantic import BaseModel, Field, field_validator
from pydantic_ai import BinaryContent

from admin_assistant.flows.base import generation_errors
from admin_assistant.llm.completion import CompletionProvider, PromptTemplate, UserPrompt

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.+)$", re.DOTALL)


class ImageAnalysisInput(BaseModel):
    """A product image as a base64 data URI."""

    image_data_uri: str = Field(
        description=(
            "A product image as a data URI that must include a MIME type and use Base64 "
            "encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
        )
    )

    @field_validator("image_data_uri")
    @classmethod
    def check_data_uri(cls, value: str) -> str:
        match = DATA_URI_PATTERN.match(value.strip())
        if not match:
            raise ValueError("image must be a data URI of the form data:<mimetype>;base64,<data>")
        try:
            base64.b64decode(match.group("payload"), validate=True)
        except binascii.Error as e:
            raise ValueError(f"image payload is not valid base64: {e}") from e
        return value.strip()

    @property
    def media_type(self) -> str:
        return DATA_URI_PATTERN.match(self.image_data_uri).group("mime")

    @property
    def image_bytes(self) -> bytes:
        return base64.b64decode(DATA_URI_PATTERN.match(self.image_data_uri).group("payload"))


class ImageAnalysisResult(BaseModel):
    """Suggested merchandising data for an uploaded product image."""

    category: str = Field(description="A suggested product category based on the image.")
    tags: list[str] = Field(
        min_length=3,
        max_length=5,
        description="A list of 3-5 relevant tags for the product based on the image.",
    )
    initial_description: str = Field(
        description="A short, compelling initial product description based on the image content."
    )


IMAGE_ANALYSIS_INSTRUCTIONS = """You are an expert e-commerce merchandising assistant.
Analyze the provided product image.
Based SOLELY on the visual information in the image, suggest:
1. A suitable product category (e.g., "Electronics", "Apparel - Mens", "Home Goods - Kitchen").
2. 3 to 5 relevant and specific tags (e.g., "wireless earbuds", "noise cancelling", "bluetooth 5.0" or "summer dress", "floral print", "cotton").
3. A short, engaging, and descriptive initial product description (1-2 sentences) highlighting key visual features.
"""


def _render(values: ImageAnalysisInput) -> UserPrompt:
    return [
        "Product Image:",
        BinaryContent(data=values.image_bytes, media_type=values.media_type),
    ]


IMAGE_ANALYSIS_PROMPT: PromptTemplate[ImageAnalysisInput] = PromptTemplate(
    name="analyze_product_image",
    instructions=IMAGE_ANALYSIS_INSTRUCTIONS,
    render=_render,
)


async def analyze_product_image(provider: CompletionProvider, image_data_uri: str) -> ImageAnalysisResult:
    """
    Analyze a product image.

    Raises:
        ValidationError: The image is not a base64 data URI. The model is never called.
        ProviderUnavailable: The completion provider could not be reached.
        GenerationFailed: The model returned no usable analysis.
    """
    with generation_errors("Failed to get analysis from AI model."):
        result = await provider.complete(
            IMAGE_ANALYSIS_PROMPT,
            {"image_data_uri": image_data_uri},
            ImageAnalysisInput,
            ImageAnalysisResult,
        )
    logger.info("Image analyzed: category=%s tags=%d", result.category, len(result.tags))
    return result
