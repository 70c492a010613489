"""
webhook_gateway.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (registry, authorizer, services).
"""

from __future__ import annotations

from fastapi import Request

from webhook_gateway.auth.authorizer import Authorizer
from webhook_gateway.registry.base import UserRegistry
from webhook_gateway.services.user_admin import UserAdminService


def registry_dep(request: Request) -> UserRegistry:
    # Created once in `webhook_gateway.api.app.create_app` and shared by all requests.
    return request.app.state.registry  # type: ignore[attr-defined]


def authorizer_dep(request: Request) -> Authorizer:
    return request.app.state.authorizer  # type: ignore[attr-defined]


def user_admin_dep(request: Request) -> UserAdminService:
    return request.app.state.user_admin  # type: ignore[attr-defined]
