# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Name-keyed registry of probe driver factories."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from contextlib import suppress
from typing import Any

from .drivers import BUILTIN_DRIVERS, ProbeDriver
from .errors import ConfigError
from .http.client import HttpClient, create_default_http_client
from .ratelimit import TokenBucketLimiter

logger = logging.getLogger(__name__)

DriverFactory = Callable[..., ProbeDriver]


class DriverRegistry:
    """
    Maps driver names to factories taking ``(options, http_client=..., limiter=...)``.

    Registration is explicit; importing a driver module registers nothing.
    The registry holds one limiter and one HTTP client and hands them to every
    driver it creates unless the caller supplies its own. A client the registry
    built itself is closed by ``close()``.
    """

    def __init__(
        self,
        *,
        http_client: HttpClient | None = None,
        limiter: TokenBucketLimiter | None = None,
    ) -> None:
        self._factories: dict[str, DriverFactory] = {}
        self._lock = threading.Lock()
        self._http_client = http_client
        self._owns_http_client = False
        self.limiter = limiter or TokenBucketLimiter.from_settings()

    @property
    def http_client(self) -> HttpClient:
        with self._lock:
            if self._http_client is None:
                self._http_client = create_default_http_client()
                self._owns_http_client = True
            return self._http_client

    def register(self, name: str, factory: DriverFactory) -> None:
        if not name:
            raise ValueError("driver name must be non-empty")
        with self._lock:
            if name in self._factories:
                raise ValueError(f"driver {name!r} is already registered")
            self._factories[name] = factory
        logger.debug("registered probe driver %s", name)

    def unregister(self, name: str) -> None:
        with self._lock:
            self._factories.pop(name, None)

    def get(self, name: str) -> DriverFactory:
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            raise ConfigError(f"unknown probe driver {name!r}")
        return factory

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._factories)

    def create(self, name: str, options: Mapping[str, str], **dependencies: Any) -> ProbeDriver:
        factory = self.get(name)
        dependencies.setdefault("limiter", self.limiter)
        if dependencies.get("http_client") is None:
            dependencies["http_client"] = self.http_client
        return factory(options, **dependencies)

    def close(self) -> None:
        with self._lock:
            client, owned = self._http_client, self._owns_http_client
            if owned:
                self._http_client = None
                self._owns_http_client = False
        if owned and client is not None:
            with suppress(Exception):
                client.close()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._factories

    def __enter__(self) -> DriverRegistry:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def register_builtin_drivers(registry: DriverRegistry) -> DriverRegistry:
    """Register every bundled driver; called from the orchestrator's bootstrap."""
    for name, factory in BUILTIN_DRIVERS.items():
        registry.register(name, factory)
    return registry


__all__ = ["DriverFactory", "DriverRegistry", "register_builtin_drivers"]
