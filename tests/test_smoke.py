"""
tests.test_smoke

Minimal smoke tests to validate the gateway can boot and serve its health checks.
"""

from __future__ import annotations

import httpx
import pytest

from tests.support.registry import FailingRegistry


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_readyz_reports_registry_outage(gateway, settings, registry, upstream) -> None:
    async with gateway(settings, FailingRegistry(registry), upstream) as client:
        r = await client.get("/readyz")
    assert r.status_code == 503


@pytest.mark.asyncio
async def test_request_id_propagated(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"

    r = await client.get("/healthz")
    assert r.headers["x-request-id"]
