"""FastAPI application server for the admin assistant."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from admin_assistant.api.middleware import RequestLoggingMiddleware
from admin_assistant.api.routes import router
from admin_assistant.config import get_settings
from admin_assistant.conversation.service import build_assistant_service
from admin_assistant.exceptions import AssistantError
from admin_assistant.observability.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Configures logging, builds the assistant service and checks the Shopify
    connection once. A failed check is logged and exposed on /v1/shop/status;
    it never stops startup.
    """
    settings = get_settings()

    configure_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info("Starting admin assistant...")

    service = getattr(app.state, "assistant", None)
    if service is None:
        service = build_assistant_service(settings)
        app.state.assistant = service

    status = await service.check_shop_connection()
    if status.connected and status.shop:
        logger.info("Connected to Shopify store: %s", status.shop.name)
    else:
        logger.warning("Shopify not connected: %s", status.error)

    logger.info("Admin assistant ready")

    yield

    logger.info("Shutting down admin assistant...")
    await service.close()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=(
            "Conversational store admin assistant. Routes chat turns to store "
            "dashboards, AI product drafting and Shopify catalog queries."
        ),
        lifespan=lifespan,
    )

    # Domain exception handler: map AssistantError to JSON response
    @app.exception_handler(AssistantError)
    async def assistant_error_handler(request: Request, exc: AssistantError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    # Add CORS middleware (origins configurable via CORS_ORIGINS env)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "admin_assistant.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
