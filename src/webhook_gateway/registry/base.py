"""
webhook_gateway.registry.base

The user registry interface.

Responsibilities:
- Describe CRUD access to a token-keyed store of `UserRecord`s.
- Provide the shared exception conversion used by every backend.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine, Sequence
from functools import wraps
from typing import Any, ParamSpec, Protocol, TypeVar

from webhook_gateway.auth.models import UserRecord
from webhook_gateway.exceptions import RegistryError

P = ParamSpec("P")
T = TypeVar("T")


class UserRegistry(Protocol):
    """
    Token-keyed user store.

    `get_by_token` returns None for an unknown token and raises `RegistryError`
    when the store cannot be reached, so callers can tell the two apart. Bulk
    mutations raise `RegistryPartialFailureError` when only some records could
    be changed.
    """

    async def initialize(self) -> None: ...

    async def get_by_token(self, token: str) -> UserRecord | None: ...

    async def create_or_replace(
        self, token: str, name: str, *, is_admin: bool = False
    ) -> UserRecord: ...

    async def find_all_by_name(self, name: str) -> list[UserRecord]: ...

    async def delete_all(self, records: Sequence[UserRecord]) -> int: ...

    async def set_admin_flag(
        self, records: Sequence[UserRecord], is_admin: bool = True
    ) -> int: ...

    async def ping(self) -> None: ...

    async def close(self) -> None: ...


def convert_exceptions(
    *errors: type[BaseException],
) -> Callable[
    [Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]
]:
    """Convert backend-specific exceptions to `RegistryError`."""

    def decorator(
        f: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        @wraps(f)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await f(*args, **kwargs)
            except errors as e:
                raise RegistryError(f"{type(e).__name__}: {e}") from e

        return wrapper

    return decorator
