# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared across probe drivers."""

from __future__ import annotations

import httpx

from ..errors import SecurityError


def build_endpoint_url(template: str, **fields: str) -> str:
    """Format caller-influenced values into a fixed endpoint template."""
    return template.format(**fields)


def validate_url_suffix(url: str, suffix: str, *, scheme: str = "https") -> str:
    """
    Return ``url`` in normalized form when its host ends with ``suffix``.

    The URL is parsed with the same parser httpx uses to send the request, so the
    host checked here is the host that will be contacted. Userinfo is rejected
    because it only appears when a value smuggled an ``@`` into the authority.

    Raises SecurityError otherwise.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise SecurityError(f"refusing to use unparseable URL {url!r}: {exc}") from exc

    host = (parsed.host or "").lower().rstrip(".")
    expected = suffix.lower()
    if parsed.scheme != scheme:
        raise SecurityError(f"refusing non-{scheme} URL {url!r}")
    if parsed.userinfo:
        raise SecurityError(f"refusing URL with embedded userinfo {url!r}")
    if not host.endswith(expected) or host.startswith("."):
        raise SecurityError(f"URL host {host!r} is not under {expected!r}")
    return str(parsed)


__all__ = ["build_endpoint_url", "validate_url_suffix"]
