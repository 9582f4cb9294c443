# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
authprobe package entrypoint.

This package provides rate-limited authentication probe drivers: each driver
performs one login attempt against an identity provider and classifies the
answer into a normalized AuthOutcome. HTTP behavior is abstracted behind an
injectable client interface, and the throttle is an explicitly shared object.
"""

from .config import HttpSettings, RateLimitSettings, load_http_settings, load_rate_limit_settings
from .drivers import OktaDriver, ProbeDriver
from .errors import (
    ConfigError,
    ErrorCategory,
    NetworkError,
    ProbeError,
    ProtocolError,
    RateLimitCancelled,
    SecurityError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import AuthOutcome, Credential
from .ratelimit import TokenBucketLimiter
from .registry import DriverRegistry, register_builtin_drivers
from .runtime import AuthProbe
from .utils.context import probe_context
from .version import __version__

__all__ = [
    "AuthOutcome",
    "AuthProbe",
    "ConfigError",
    "Credential",
    "DriverRegistry",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "NetworkError",
    "OktaDriver",
    "ProbeDriver",
    "ProbeError",
    "ProtocolError",
    "RateLimitCancelled",
    "RateLimitSettings",
    "SecurityError",
    "StubHttpClient",
    "TokenBucketLimiter",
    "__version__",
    "create_default_http_client",
    "load_http_settings",
    "load_rate_limit_settings",
    "probe_context",
    "register_builtin_drivers",
    "setup_logging",
]
