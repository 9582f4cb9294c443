# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for authprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .outcome import AuthOutcome, Credential

__all__ = [
    "AuthOutcome",
    "Credential",
    "Headers",
    "HttpRequest",
    "HttpResponse",
]
