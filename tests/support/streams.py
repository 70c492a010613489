"""Streamed response bodies for upstream doubles."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx

__all__ = ["ChunkedBody"]


class ChunkedBody(httpx.AsyncByteStream):
    """Response body delivered in chunks, as a network transport would."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
