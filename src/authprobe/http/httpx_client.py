# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx transport for probe drivers."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from ..utils.context import get_probe_context
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

FALLBACK_MAX_BODY_BYTES = 1024 * 1024


def _read_capped(resp: httpx.Response, limit: int) -> tuple[bytes, bool]:
    """Read at most ``limit`` bytes of an open streamed response."""
    buffer = bytearray()
    for chunk in resp.iter_bytes():
        room = limit - len(buffer)
        if len(chunk) > room:
            buffer.extend(chunk[:room])
            return bytes(buffer), True
        buffer.extend(chunk)
    return bytes(buffer), False


def _decode(content: bytes, encoding: str | None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


class HttpxClient(HttpClient):
    """
    One pooled ``httpx.Client`` serving every driver of a runtime.

    Authentication endpoints answer with small JSON documents, so bodies are
    read up to ``max_body_bytes`` and anything past that is dropped. The
    response is consumed inside the stream block, which hands the connection
    back to the pool whether reading succeeds or fails.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _timeout_for(self, request: HttpRequest) -> float:
        if request.timeout is not None:
            return request.timeout
        ambient = get_probe_context().timeout
        return ambient if ambient is not None else self.settings.timeout

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        limit = self.settings.max_body_bytes if self.settings.max_body_bytes > 0 else FALLBACK_MAX_BODY_BYTES

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=self._timeout_for(request),
                follow_redirects=request.allow_redirects,
            ) as resp:
                content, truncated = _read_capped(resp, limit)
                text = _decode(content, resp.encoding)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.debug("%s %s failed (%s): %s", request.method, request.url, category.value, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_category=category.value,
                error_message=str(exc),
                error_type=type(exc).__name__,
                error=exc,
            )

        if truncated:
            logger.debug("%s %s: body cut at %d bytes", request.method, request.url, limit)
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
            meta={"body_truncated": truncated, "body_bytes_limit": limit},
        )

    def close(self) -> None:
        self._client.close()
