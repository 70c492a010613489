"""
webhook_gateway.proxy.table

Forwarding table construction.

Responsibilities:
- Parse the `name=url;name=url` webhook configuration.
- Validate route names and target URLs once, at startup.
- Wrap every route in its own `Forwarder`.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping

import httpx

from webhook_gateway.exceptions import ConfigurationError
from webhook_gateway.proxy.forwarder import Forwarder, ForwardingRoute
from webhook_gateway.settings import Settings

# Paths the gateway serves itself; a webhook route may not shadow them.
RESERVED_ROUTE_NAMES = frozenset(
    {"newToken", "deleteUser", "promoteUser", "healthz", "readyz", "docs", "openapi.json"}
)

_ROUTE_NAME_RE = re.compile(r"^[A-Za-z0-9._~-]+$")


def parse_webhook_urls(raw: str) -> dict[str, str]:
    entries: dict[str, str] = {}
    for item in raw.split(";"):
        item = item.strip()
        if not item:
            continue
        name, sep, url = item.partition("=")
        name, url = name.strip(), url.strip()
        if not sep or not name or not url:
            raise ConfigurationError(f"Malformed webhook entry {item!r}; expected name=url")
        if name in entries:
            raise ConfigurationError(f"Duplicate webhook route {name!r}")
        entries[name] = url
    if not entries:
        raise ConfigurationError("No webhook routes configured")
    return entries


def parse_route(route_name: str, target: str) -> ForwardingRoute:
    if not _ROUTE_NAME_RE.match(route_name) or route_name in (".", ".."):
        raise ConfigurationError(f"Invalid webhook route name {route_name!r}")
    if route_name in RESERVED_ROUTE_NAMES:
        raise ConfigurationError(f"Webhook route {route_name!r} collides with a gateway route")
    try:
        url = httpx.URL(target)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Invalid target URL for route {route_name!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"Target URL for route {route_name!r} must be an absolute http(s) URL"
        )
    return ForwardingRoute(route_name=route_name, target_url=url)


class ForwardingTable(Mapping[str, Forwarder]):
    """
    Route name to forwarder. Immutable once built.
    """

    def __init__(self, forwarders: Mapping[str, Forwarder]) -> None:
        self._forwarders = dict(forwarders)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, str],
        *,
        http: httpx.AsyncClient,
        forward_query_params: bool = False,
    ) -> ForwardingTable:
        if not mapping:
            raise ConfigurationError("No webhook routes configured")
        forwarders = {
            name: Forwarder(
                parse_route(name, target),
                http=http,
                forward_query_params=forward_query_params,
            )
            for name, target in mapping.items()
        }
        return cls(forwarders)

    @classmethod
    def from_settings(cls, settings: Settings, *, http: httpx.AsyncClient) -> ForwardingTable:
        return cls.from_mapping(
            parse_webhook_urls(settings.webhook_urls),
            http=http,
            forward_query_params=settings.forward_query_params,
        )

    def __getitem__(self, route_name: str) -> Forwarder:
        return self._forwarders[route_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._forwarders)

    def __len__(self) -> int:
        return len(self._forwarders)
