# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport seam between probe drivers and the network."""

from __future__ import annotations

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    What a driver needs from a transport.

    ``request`` must not raise for network failures; it reports them as an
    ``HttpResponse`` with ``ok=False`` so the driver decides how to surface them.
    Implementations are shared by concurrent probes and must be thread-safe.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - stubs may hold nothing to release
        ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Build the httpx transport; the caller owns it and must close it."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())
