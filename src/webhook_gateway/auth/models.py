"""
webhook_gateway.auth.models

Auth domain models.

Responsibilities:
- Define the credentialed principal stored in the registry (`UserRecord`).
- Define the privilege levels routes are gated at.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Privilege(enum.StrEnum):
    user = "user"
    admin = "admin"


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    One credential in the registry.

    The token is both the bearer credential and the record key. Names are not
    unique; several tokens may belong to the same name.
    """

    token: str
    name: str
    is_admin: bool = False

    def has(self, privilege: Privilege) -> bool:
        if privilege is Privilege.admin:
            return self.is_admin
        return True


@dataclass(frozen=True, slots=True)
class AdminCommand:
    """
    Parameters of an authorized admin request: the caller and the target name.
    """

    caller_token: str
    name: str
