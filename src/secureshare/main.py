"""Main entry point for the SecureShare application."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from secureshare import __version__
from secureshare.api.error_handlers import register_error_handlers
from secureshare.api.v1 import transfers_router, users_router
from secureshare.container import AppContainer, build_container
from secureshare.core.log import configure_logging
from secureshare.core.settings import Settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    container: AppContainer | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Components are constructed here, so configuration errors (such as an
    empty token secret) abort startup instead of failing the first request.
    """
    if container is None:
        settings = settings or Settings()
        configure_logging(settings.log_level)
        container = build_container(settings)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("%s %s started", settings.app_name, settings.app_version)
        try:
            yield
        finally:
            container.close()
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title="SecureShare API",
        description="Identity and transfer metadata for end-to-end encrypted file sharing",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_error_handlers(app)

    app.include_router(users_router, prefix="/v1")
    app.include_router(transfers_router, prefix="/v1")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


def main() -> None:
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "secureshare.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
