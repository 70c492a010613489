"""
webhook_gateway.api.app

FastAPI app factory for the webhook gateway.

Responsibilities:
- Validate configuration and build long-lived collaborators (registry, HTTP client,
  forwarding table) before the app can serve anything.
- Register routers/middleware.
- Initialize and dispose shared infrastructure on startup/shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from webhook_gateway import __version__
from webhook_gateway.api.routers.admin import router as admin_router
from webhook_gateway.api.routers.health import router as health_router
from webhook_gateway.api.routers.hooks import build_hooks_router
from webhook_gateway.auth.authorizer import Authorizer
from webhook_gateway.observability.logging import configure_logging, get_logger
from webhook_gateway.observability.middleware import RequestContextMiddleware
from webhook_gateway.proxy.table import ForwardingTable
from webhook_gateway.registry.base import UserRegistry
from webhook_gateway.registry.factory import create_registry
from webhook_gateway.services.user_admin import UserAdminService
from webhook_gateway.settings import Settings

log = get_logger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    # No retries and no redirect following: one upstream attempt per request.
    if settings.proxy_timeout is None:
        return httpx.AsyncClient(follow_redirects=False)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.proxy_timeout),
        follow_redirects=False,
    )


def create_app(
    *,
    settings: Settings,
    registry: UserRegistry | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """
    Build the gateway.

    Raises `ConfigurationError` for any invalid configuration; nothing is served
    in that case. `registry` and `http_client` may be injected (tests); injected
    collaborators are not closed on shutdown.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    owns_http = http_client is None
    http = http_client if http_client is not None else create_http_client(settings)
    table = ForwardingTable.from_settings(settings, http=http)

    owns_registry = registry is None
    registry = registry if registry is not None else create_registry(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            routes=sorted(table),
            registry=settings.registry_backend,
        )
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create the schema. Prod uses Alembic migrations.
            await registry.initialize()
        try:
            yield
        finally:
            if owns_http:
                await http.aclose()
            if owns_registry:
                await registry.close()
            log.info("shutdown")

    app = FastAPI(
        title="Webhook Gateway",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.authorizer = Authorizer(registry)
    app.state.user_admin = UserAdminService(registry=registry, token_bytes=settings.token_bytes)

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(admin_router)
    app.include_router(build_hooks_router(table))

    return app


# --- Module Notes -----------------------------------------------------------
# Configuration errors surface from this function, not from a request handler.
# The entrypoint in `api.__main__` turns them into a non-zero exit.
