# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for authprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"authprobe/{__version__}"

DEFAULT_LIMITER_INTERVAL = 0.3
DEFAULT_LIMITER_BURST = 1


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_body_bytes: int = 1024 * 1024

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("AUTHPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        timeout = _float_env("AUTHPROBE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            allow_redirects=_bool_env("AUTHPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("AUTHPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


@dataclass
class RateLimitSettings:
    """Token bucket parameters shared by every driver of one runtime."""

    interval: float = DEFAULT_LIMITER_INTERVAL
    burst: int = DEFAULT_LIMITER_BURST

    @classmethod
    def from_env(cls) -> "RateLimitSettings":
        interval = _float_env("AUTHPROBE_RATE_INTERVAL", cls.interval)
        burst = _int_env("AUTHPROBE_RATE_BURST", cls.burst)
        return cls(
            interval=interval if interval > 0 else cls.interval,
            burst=burst if burst > 0 else cls.burst,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_rate_limit_settings() -> RateLimitSettings:
    """Load limiter settings from environment with sensible defaults."""
    return RateLimitSettings.from_env()
