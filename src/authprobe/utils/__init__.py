# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared helpers."""

from .context import ProbeContext, get_probe_context, probe_context

__all__ = ["ProbeContext", "get_probe_context", "probe_context"]
