"""
webhook_gateway.auth.tokens

Opaque token generation.

Responsibilities:
- Produce hex-encoded tokens from the OS CSPRNG.
- Fail closed when the entropy source is unavailable.
"""

from __future__ import annotations

import secrets

from webhook_gateway.exceptions import TokenGenerationError

MIN_TOKEN_BYTES = 10


def generate_token(length: int = MIN_TOKEN_BYTES) -> str:
    if length < MIN_TOKEN_BYTES:
        raise ValueError(f"token length must be at least {MIN_TOKEN_BYTES} bytes")
    try:
        raw = secrets.token_bytes(length)
    except (OSError, NotImplementedError) as e:
        raise TokenGenerationError(f"entropy source unavailable: {e}") from e
    return raw.hex()


# --- Module Notes -----------------------------------------------------------
# Tokens are looked up by exact match; there is no signature or expiry to verify.
