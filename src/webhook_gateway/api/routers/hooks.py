"""
webhook_gateway.api.routers.hooks

Webhook forwarding endpoints (user privilege).

Responsibilities:
- Register one route per forwarding table entry, with its forwarder bound once.
- Map upstream failures to 502/504.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response
from starlette.status import HTTP_502_BAD_GATEWAY, HTTP_504_GATEWAY_TIMEOUT

from webhook_gateway.auth.deps import require_user
from webhook_gateway.exceptions import UpstreamError, UpstreamTimeoutError
from webhook_gateway.observability.logging import get_logger, redact_token
from webhook_gateway.proxy.forwarder import Forwarder
from webhook_gateway.proxy.table import ForwardingTable

log = get_logger(__name__)

HOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def build_hooks_router(table: ForwardingTable) -> APIRouter:
    router = APIRouter(tags=["hooks"])
    for route_name, forwarder in table.items():
        router.add_api_route(
            f"/{route_name}",
            _make_handler(forwarder),
            methods=HOOK_METHODS,
            name=f"hook_{route_name}",
            response_class=Response,
        )
    return router


def _make_handler(forwarder: Forwarder) -> Callable[..., Awaitable[Response]]:
    route_name = forwarder.route.route_name

    async def forward(request: Request, token: str = Depends(require_user)) -> Response:
        try:
            return await forwarder.forward(request)
        except UpstreamTimeoutError as e:
            log.error("upstream_timeout", route=route_name, token=redact_token(token), error=str(e))
            raise HTTPException(status_code=HTTP_504_GATEWAY_TIMEOUT, detail="Upstream timeout") from e
        except UpstreamError as e:
            log.error("upstream_error", route=route_name, token=redact_token(token), error=str(e))
            raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail="Bad gateway") from e

    return forward
