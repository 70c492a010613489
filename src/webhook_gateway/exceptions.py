"""
webhook_gateway.exceptions

Exception hierarchy for the gateway.

Responsibilities:
- Separate fatal configuration errors from per-request runtime errors.
- Give registry failures a type distinct from "not found".
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "ConfigurationError",
    "GatewayError",
    "RegistryError",
    "RegistryPartialFailureError",
    "TokenGenerationError",
    "UpstreamError",
    "UpstreamTimeoutError",
]


class GatewayError(Exception):
    """Base class for gateway errors."""


class ConfigurationError(GatewayError):
    """The gateway configuration is invalid; startup must abort."""


class TokenGenerationError(GatewayError):
    """The entropy source failed while generating a token."""


class RegistryError(GatewayError):
    """Communication with the user registry failed."""


class RegistryPartialFailureError(RegistryError):
    """Some operations of a bulk registry mutation failed.

    Parameters
    ----------
    operation
        Name of the bulk operation, for logging.
    succeeded
        Number of records the operation was applied to.
    failed
        Redacted tokens of the records it could not be applied to.
    """

    def __init__(self, operation: str, *, succeeded: int, failed: Sequence[str]) -> None:
        self.operation = operation
        self.succeeded = succeeded
        self.failed = list(failed)
        super().__init__(
            f"{operation} failed for {len(self.failed)} of"
            f" {succeeded + len(self.failed)} records"
        )


class UpstreamError(GatewayError):
    """A forwarded request could not be delivered to its upstream."""


class UpstreamTimeoutError(UpstreamError):
    """The upstream did not answer within the configured timeout."""
