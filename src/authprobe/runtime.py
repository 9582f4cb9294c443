# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring shared collaborators into probe drivers."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress

from .config import load_http_settings
from .drivers import ProbeDriver
from .http.client import HttpClient, create_default_http_client
from .ratelimit import TokenBucketLimiter
from .registry import DriverRegistry, register_builtin_drivers


class AuthProbe:
    """
    Convenience wrapper that shares one HTTP client and one rate limiter across drivers.

    Every driver created here draws permits from the same limiter, so the
    request rate stays bounded no matter how many organizations or workers
    are involved.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        limiter: TokenBucketLimiter | None = None,
        registry: DriverRegistry | None = None,
    ):
        self.http_settings = load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.limiter = limiter or TokenBucketLimiter.from_settings()
        self.registry = registry or register_builtin_drivers(
            DriverRegistry(http_client=self.http_client, limiter=self.limiter)
        )

    def driver(self, name: str, options: Mapping[str, str]) -> ProbeDriver:
        return self.registry.create(name, options, http_client=self.http_client, limiter=self.limiter)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> AuthProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
