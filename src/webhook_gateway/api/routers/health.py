"""
webhook_gateway.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`) with registry connectivity validation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from webhook_gateway.api.deps import registry_dep
from webhook_gateway.exceptions import RegistryError
from webhook_gateway.observability.logging import get_logger
from webhook_gateway.registry.base import UserRegistry

router = APIRouter()
log = get_logger(__name__)


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(registry: UserRegistry = Depends(registry_dep)) -> dict[str, str]:
    try:
        await registry.ping()
    except RegistryError as e:
        log.warning("registry_unreachable", error=str(e))
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Registry unavailable"
        ) from e
    return {"status": "ready"}


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses /healthz for liveness and /readyz for readiness gating.
