"""Catalog query agent: answers free-text store questions using the catalog tools."""

import logging

from pydantic import BaseModel, Field

from admin_assistant.integrations.base import CatalogSource
from admin_assistant.llm.completion import CompletionProvider, PromptTemplate
from admin_assistant.observability.tracing import traced
from admin_assistant.tools.catalog import CATALOG_TOOLS, CatalogToolDeps

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = (
    "I'm sorry, I wasn't able to generate a response for your Shopify query. "
    "Please try rephrasing."
)


class CatalogQuery(BaseModel):
    query: str = Field(
        description=(
            "The user's natural language query about their Shopify store "
            "(e.g., 'list my latest products', 'show details for product 12345')."
        )
    )


class CatalogAnswer(BaseModel):
    """What the model is asked to produce."""

    response: str = Field(
        default="",
        description="Natural language answer to the query, built only from tool outputs.",
    )


class AgentReply(BaseModel):
    """Reply handed back to the conversation; errors are in-band."""

    response: str
    is_error: bool = False
    error_message: str | None = None


CATALOG_AGENT_SYSTEM_PROMPT = """You are an AI assistant helping manage a Shopify e-commerce store.
Use the available tools to answer the user's questions about products.
When presenting product information:
- For lists of products, provide a concise summary (name, status, inventory). If an image URL is available, mention it.
- For single product details, include name, description (summarize HTML if long), price, status, inventory, vendor, and image URL if available.
- If a tool call results in an error or no data, inform the user clearly and politely.
- Do not make up information. Only rely on the tool outputs.
- If the query is ambiguous or a tool requires an ID that isn't provided, ask the user for clarification."""

CATALOG_QUERY_PROMPT: PromptTemplate[CatalogQuery] = PromptTemplate(
    name="catalog_query",
    instructions=CATALOG_AGENT_SYSTEM_PROMPT,
    render=lambda values: f"User's query: {values.query}",
)


class CatalogQueryAgent:
    """
    Tool-calling agent over the remote catalog.

    The model decides which tools to call and how often; only its final text
    is returned. `query` never raises: every failure becomes an error reply.
    """

    def __init__(self, provider: CompletionProvider, catalog: CatalogSource) -> None:
        self.provider = provider
        self.catalog = catalog

    @traced(name="catalog_agent.query", attributes={"component": "agent"})
    async def query(self, text: str) -> AgentReply:
        try:
            answer = await self.provider.complete(
                CATALOG_QUERY_PROMPT,
                {"query": text},
                CatalogQuery,
                CatalogAnswer,
                tools=CATALOG_TOOLS,
                deps=CatalogToolDeps(catalog=self.catalog),
            )
        except Exception as e:
            logger.exception("Error in catalog query agent")
            message = getattr(e, "message", None) or str(e) or "Unknown error"
            return AgentReply(
                response=(
                    f"I encountered an issue trying to process your Shopify query: {message}. "
                    "Please ensure your Shopify connection is configured correctly and try again."
                ),
                is_error=True,
                error_message=message,
            )

        if not answer.response.strip():
            logger.warning("Catalog agent produced an empty response for query: %s", text)
            return AgentReply(
                response=EMPTY_RESPONSE_TEXT,
                is_error=True,
                error_message="LLM did not produce a response string.",
            )
        return AgentReply(response=answer.response)
