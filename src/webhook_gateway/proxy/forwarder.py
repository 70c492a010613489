"""
webhook_gateway.proxy.forwarder

Single-target reverse proxy.

Responsibilities:
- Rewrite an inbound request to the route's fixed upstream URL.
- Stream the request body up and the upstream response back unchanged.
- Make exactly one attempt; report transport failures as `UpstreamError`.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import StreamingResponse

from webhook_gateway.exceptions import UpstreamError, UpstreamTimeoutError
from webhook_gateway.observability.logging import get_logger

log = get_logger(__name__)

# Hop-by-hop headers (RFC 7230 section 6.1) are never relayed in either direction.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)

# The gateway credential; never passed upstream.
TOKEN_PARAM = "token"


@dataclass(frozen=True, slots=True)
class ForwardingRoute:
    route_name: str
    target_url: httpx.URL


class Forwarder:
    """
    Relays requests for one route to its configured target.

    The outgoing request keeps the inbound method, headers and body; scheme, host
    and path come from the target URL. The inbound query string is dropped unless
    `forward_query_params` is set, in which case everything except the token is
    appended to the target's own query.
    """

    def __init__(
        self,
        route: ForwardingRoute,
        *,
        http: httpx.AsyncClient,
        forward_query_params: bool = False,
    ) -> None:
        self._route = route
        self._http = http
        self._forward_query_params = forward_query_params

    @property
    def route(self) -> ForwardingRoute:
        return self._route

    def build_request(self, request: Request) -> httpx.Request:
        url = self._route.target_url
        if self._forward_query_params:
            params = [
                (k, v) for k, v in request.query_params.multi_items() if k != TOKEN_PARAM
            ]
            if params:
                url = url.copy_merge_params(params)

        # Host is dropped so the client sets it from the target URL.
        headers = [
            (k, v)
            for k, v in request.headers.items()
            if k not in HOP_BY_HOP_HEADERS and k != "host"
        ]
        content = request.stream() if _has_body(request) else None
        return self._http.build_request(request.method, url, headers=headers, content=content)

    async def forward(self, request: Request) -> StreamingResponse:
        outgoing = self.build_request(request)
        try:
            upstream = await self._http.send(outgoing, stream=True)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                f"{self._route.route_name}: upstream timed out ({type(e).__name__})"
            ) from e
        except httpx.RequestError as e:
            raise UpstreamError(
                f"{self._route.route_name}: upstream unreachable ({type(e).__name__}: {e})"
            ) from e

        log.info(
            "request_forwarded",
            route=self._route.route_name,
            upstream_host=outgoing.url.host,
            status=upstream.status_code,
        )
        response = StreamingResponse(
            upstream.aiter_raw(),
            status_code=upstream.status_code,
            background=BackgroundTask(upstream.aclose),
        )
        # aiter_raw keeps the upstream encoding, so Content-Encoding/Length stay valid.
        response.raw_headers = [
            (k.encode("latin-1"), v.encode("latin-1"))
            for k, v in upstream.headers.multi_items()
            if k not in HOP_BY_HOP_HEADERS
        ]
        return response


def _has_body(request: Request) -> bool:
    if "transfer-encoding" in request.headers:
        return True
    length = request.headers.get("content-length")
    return bool(length) and length != "0"
