"""Shared fixtures: a SQLite-backed registry and an in-process gateway."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from tests.support.constants import ADMIN_TOKEN, USER_TOKEN, WEBHOOK_URLS
from tests.support.registry import SpyRegistry
from tests.support.streams import ChunkedBody
from webhook_gateway.api.app import create_app
from webhook_gateway.registry.base import UserRegistry
from webhook_gateway.registry.sql import SqlUserRegistry
from webhook_gateway.settings import Settings


class Upstream:
    """Records forwarded requests and answers with a configurable response.

    Responses built with `content=` or `json=` are already read by httpx; they
    are re-wrapped in a stream so the forwarder sees an unread body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda _: httpx.Response(
            204
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.respond(request)
        try:
            body = response.content
        except httpx.ResponseNotRead:
            return response
        return httpx.Response(
            response.status_code,
            headers=response.headers,
            stream=ChunkedBody(body),
        )


@asynccontextmanager
async def run_gateway(
    settings: Settings, registry: UserRegistry, upstream: Upstream
) -> AsyncIterator[httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(settings=settings, registry=registry, http_client=http)
    try:
        # httpx's ASGITransport does not run the lifespan; drive it explicitly.
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(
                transport=transport, base_url="http://gateway.test"
            ) as client:
                yield client
    finally:
        await http.aclose()


@pytest_asyncio.fixture
async def registry(tmp_path) -> AsyncIterator[SqlUserRegistry]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")
    reg = SqlUserRegistry(engine)
    await reg.initialize()
    await reg.create_or_replace(ADMIN_TOKEN, "root", is_admin=True)
    await reg.create_or_replace(USER_TOKEN, "bob")
    try:
        yield reg
    finally:
        await reg.close()


@pytest.fixture
def spy(registry: SqlUserRegistry) -> SpyRegistry:
    return SpyRegistry(registry)


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", webhook_urls=WEBHOOK_URLS)


@pytest_asyncio.fixture
async def client(
    settings: Settings, spy: SpyRegistry, upstream: Upstream
) -> AsyncIterator[httpx.AsyncClient]:
    async with run_gateway(settings, spy, upstream) as c:
        yield c


@pytest.fixture
def gateway() -> Callable[..., object]:
    """Start a gateway with custom settings or registry inside a test."""
    return run_gateway
