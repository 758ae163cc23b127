from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.funding.api.v1.router import api_router
from src.funding.core.config import get_settings
from src.funding.core.db import dispose_engine, open_engine
from src.funding.core.exceptions import setup_exception_handlers
from src.funding.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.funding.repositories.factory import postgres_repositories

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown.

    A failed first connection (ConnectionFailure) aborts startup.
    """
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        f"Starting {settings.app_name}",
        deployment=settings.deployment.value,
        schema_variant=settings.schema_variant.value,
    )

    engine = await open_engine(settings)
    repositories = postgres_repositories(engine, settings.schema_variant)
    await repositories.init()
    app.state.repositories = repositories

    yield

    logger.info("Closing connections...")
    await dispose_engine(engine)
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Project storage and shareable views"},
    {"name": "withdrawals", "description": "Withdrawals and withdrawal requests"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Storage for funding projects, their escrows and withdrawals",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=[
            "User-Agent",
            "Sec-Fetch-Mode",
            "Referer",
            "Origin",
            "Content-Type",
            "Accept",
            "Access-Control-Request-Method",
            "Access-Control-Request-Headers",
            "X-Request-ID",
        ],
    )

    # Starlette runs the last added middleware first; the correlation id must exist
    # before the logging context binds it
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
