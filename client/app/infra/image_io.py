"""Byte-level I/O used by the image resolver.

The resolver decides *what* to load; these helpers do the loading. Each
fetch opens its own client unless one is injected, so concurrent resolves
share no connection state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx

from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0


def local_file_exists(path: str) -> bool:
    try:
        return Path(path).is_file()
    except (OSError, ValueError):
        # ValueError: embedded NUL bytes in the path.
        return False


def read_local_file(path: str) -> bytes:
    return Path(path).read_bytes()


class HttpImageFetcher:
    """Blocking image download over HTTP(S)."""

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    def __call__(self, url: str) -> bytes:
        with httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = client.get(url)
            response.raise_for_status()
            logger.debug(
                "image_fetch_complete",
                extra={"url": url, "status_code": response.status_code},
            )
            return response.content


class AsyncHttpImageFetcher:
    """Non-blocking image download over HTTP(S)."""

    def __init__(
        self,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def __call__(self, url: str) -> bytes:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            logger.debug(
                "image_fetch_complete",
                extra={"url": url, "status_code": response.status_code},
            )
            return response.content
