# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-attempt ambient context.

This module provides a ContextVar-backed ProbeContext that carries the
orchestrator's cancellation signal and request timeout. Drivers read from this
context when explicit arguments are omitted.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ProbeContext:
    cancel: threading.Event | None = None
    timeout: float | None = None
    correlation_id: str | None = None


_current_probe_context: ContextVar[ProbeContext | None] = ContextVar("authprobe_probe_context", default=None)


def get_probe_context() -> ProbeContext:
    """Return the current ambient probe context."""
    return _current_probe_context.get() or ProbeContext()


@contextmanager
def probe_context(**overrides: Any) -> Iterator[ProbeContext]:
    """
    Context manager that layers overrides onto the ambient ProbeContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_probe_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_probe_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_probe_context.reset(token)


__all__ = [
    "ProbeContext",
    "get_probe_context",
    "probe_context",
]
