"""Turn an image reference into loadable bytes.

A reference is whatever an entry carries in ``content``/``thumbnail`` or a
display override: an embedded base64 payload (optionally a ``data:`` URI), a
local file path, an absolute URL, or a path relative to the API origin.
Resolution never raises; faults come back as a failed :class:`ImageResolution`
and are logged with a short preview of the reference.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import re
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from ...config import DEFAULT_API_ORIGIN, ImageSettings, Settings
from ...infra.image_io import (
    AsyncHttpImageFetcher,
    HttpImageFetcher,
    local_file_exists,
    read_local_file,
)
from ...infra.logging import get_logger
from .wire import is_base64_like

logger = get_logger(__name__)

REMOTE_SCHEMES = ("http://", "https://")
_WHITESPACE = re.compile(r"\s+")

__all__ = [
    "ImageResolution",
    "ImageResolutionError",
    "ImageResolver",
    "ReferenceKind",
    "ReferenceTarget",
    "classify_reference",
    "decode_embedded_image",
]


class ReferenceKind(str, Enum):
    BASE64 = "base64"
    LOCAL_PATH = "local_path"
    REMOTE = "remote"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class ReferenceTarget:
    kind: ReferenceKind
    target: Optional[str] = None


@dataclass(frozen=True)
class ImageResolution:
    """Outcome of one resolve call; ``data`` is set only when ``ok``."""

    ok: bool
    kind: ReferenceKind
    data: Optional[bytes] = None
    source: Optional[str] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    retryable: bool = False


class ImageResolutionError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "internal_error",
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.retryable = retryable


def classify_reference(
    reference: str,
    *,
    api_origin: str = DEFAULT_API_ORIGIN,
    max_local_path_length: int = 260,
    file_exists: Callable[[str], bool] = local_file_exists,
) -> ReferenceTarget:
    """Decide how ``reference`` would be loaded without loading it."""

    if not reference:
        return ReferenceTarget(ReferenceKind.UNRESOLVABLE)
    if is_base64_like(reference):
        return ReferenceTarget(ReferenceKind.BASE64, "data:image")
    if len(reference) < max_local_path_length and file_exists(reference):
        return ReferenceTarget(ReferenceKind.LOCAL_PATH, reference)
    if reference.lower().startswith(REMOTE_SCHEMES):
        return ReferenceTarget(ReferenceKind.REMOTE, reference)
    if reference.startswith("/") and not reference.startswith("//"):
        return ReferenceTarget(
            ReferenceKind.REMOTE, f"{api_origin.rstrip('/')}{reference}"
        )
    return ReferenceTarget(ReferenceKind.UNRESOLVABLE)


def decode_embedded_image(reference: str) -> bytes:
    """Decode base64 image data, dropping any ``data:...;base64,`` header."""

    _, comma, tail = reference.partition(",")
    payload = _WHITESPACE.sub("", tail if comma else reference)
    if not payload:
        raise ImageResolutionError("embedded image payload is empty", code="invalid_base64")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageResolutionError(
            f"invalid base64 image data: {exc}", code="invalid_base64"
        ) from exc


class ImageResolver:
    """Resolution policy bound to an API origin and an I/O boundary."""

    def __init__(
        self,
        *,
        api_origin: str = DEFAULT_API_ORIGIN,
        images: Optional[ImageSettings] = None,
        fetch_remote: Optional[Callable[[str], bytes]] = None,
        fetch_remote_async: Optional[Callable[[str], Awaitable[bytes]]] = None,
        read_local: Callable[[str], bytes] = read_local_file,
        file_exists: Callable[[str], bool] = local_file_exists,
    ) -> None:
        self.api_origin = api_origin.rstrip("/")
        self.images = images or ImageSettings()
        timeout = self.images.fetch_timeout_seconds
        self._fetch_remote = fetch_remote or HttpImageFetcher(timeout)
        self._fetch_remote_async = fetch_remote_async or AsyncHttpImageFetcher(timeout)
        self._read_local = read_local
        self._file_exists = file_exists

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ImageResolver":
        return cls(api_origin=settings.api_origin, images=settings.images, **kwargs)

    def classify(self, reference: str) -> ReferenceTarget:
        return classify_reference(
            reference,
            api_origin=self.api_origin,
            max_local_path_length=self.images.max_local_path_length,
            file_exists=self._file_exists,
        )

    def resolve(self, reference: Optional[str]) -> ImageResolution:
        if not reference:
            return ImageResolution(ok=False, kind=ReferenceKind.UNRESOLVABLE, error_code="unresolvable")
        target = ReferenceTarget(ReferenceKind.UNRESOLVABLE)
        try:
            target = self.classify(reference)
            if target.kind is ReferenceKind.BASE64:
                data = decode_embedded_image(reference)
            elif target.kind is ReferenceKind.LOCAL_PATH:
                data = self._load_local(target.target or reference)
            elif target.kind is ReferenceKind.REMOTE:
                data = self._load_remote(target.target or reference)
            else:
                raise _unresolvable()
        except ImageResolutionError as exc:
            return self._failure(reference, target, exc)
        except Exception as exc:  # noqa: BLE001 - resolution must not abort the caller
            return self._failure(reference, target, _internal(exc))
        return ImageResolution(ok=True, kind=target.kind, data=data, source=target.target)

    async def resolve_async(self, reference: Optional[str]) -> ImageResolution:
        """Async variant; file access runs in a worker thread."""

        if not reference:
            return ImageResolution(ok=False, kind=ReferenceKind.UNRESOLVABLE, error_code="unresolvable")
        target = ReferenceTarget(ReferenceKind.UNRESOLVABLE)
        try:
            if is_base64_like(reference):
                target = ReferenceTarget(ReferenceKind.BASE64, "data:image")
                data = decode_embedded_image(reference)
            else:
                target = await asyncio.to_thread(self.classify, reference)
                if target.kind is ReferenceKind.LOCAL_PATH:
                    data = await asyncio.to_thread(
                        self._load_local, target.target or reference
                    )
                elif target.kind is ReferenceKind.REMOTE:
                    data = await self._load_remote_async(target.target or reference)
                else:
                    raise _unresolvable()
        except ImageResolutionError as exc:
            return self._failure(reference, target, exc)
        except Exception as exc:  # noqa: BLE001 - CancelledError is not an Exception
            return self._failure(reference, target, _internal(exc))
        return ImageResolution(ok=True, kind=target.kind, data=data, source=target.target)

    def _load_local(self, path: str) -> bytes:
        try:
            return self._read_local(path)
        except OSError as exc:
            raise ImageResolutionError(
                f"failed to read {path}: {exc}", code="file_unreadable"
            ) from exc

    def _load_remote(self, url: str) -> bytes:
        try:
            return self._fetch_remote(url)
        except Exception as exc:  # noqa: BLE001 - any transport fault is a fetch failure
            raise _fetch_failed(url, exc) from exc

    async def _load_remote_async(self, url: str) -> bytes:
        try:
            return await self._fetch_remote_async(url)
        except Exception as exc:  # noqa: BLE001 - any transport fault is a fetch failure
            raise _fetch_failed(url, exc) from exc

    def _failure(
        self,
        reference: str,
        target: ReferenceTarget,
        exc: ImageResolutionError,
    ) -> ImageResolution:
        logger.warning(
            "image_resolution_failed",
            extra={
                "error_code": exc.code,
                "reference_kind": target.kind.value,
                "reference_length": len(reference),
                "reference_preview": reference[: self.images.preview_chars],
                "detail": str(exc),
            },
        )
        return ImageResolution(
            ok=False,
            kind=target.kind,
            source=target.target,
            error_code=exc.code,
            message=str(exc),
            retryable=exc.retryable,
        )


def _unresolvable() -> ImageResolutionError:
    return ImageResolutionError(
        "reference is not base64, an existing file or a URL",
        code="unresolvable",
    )


def _fetch_failed(url: str, exc: Exception) -> ImageResolutionError:
    return ImageResolutionError(
        f"failed to fetch {url}: {exc}", code="fetch_failed", retryable=True
    )


def _internal(exc: Exception) -> ImageResolutionError:
    return ImageResolutionError(f"unexpected resolver fault: {exc}")
