# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Credential and authentication outcome dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credential:
    """One username/password pair; lives only for the duration of a probe."""

    username: str
    password: str = field(repr=False)

    def to_payload(self) -> dict[str, str]:
        return {"username": self.username, "password": self.password}


@dataclass
class AuthOutcome:
    """
    Normalized result of one login attempt.

    ``rate_limited`` means the provider refused to classify the attempt, so the
    remaining flags keep their defaults. ``status`` and ``factor_result`` echo
    the provider's fields when it returned them.
    """

    valid: bool = False
    mfa_required: bool = False
    locked_out: bool = False
    rate_limited: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)
    status: str | None = None
    factor_result: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "mfa_required": self.mfa_required,
            "locked_out": self.locked_out,
            "rate_limited": self.rate_limited,
            "metadata": dict(self.metadata),
            "status": self.status,
            "factor_result": self.factor_result,
        }
