# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe driver base class."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod

from ..models import AuthOutcome, Credential


class ProbeDriver(ABC):
    """One login attempt against one provider, classified into an AuthOutcome."""

    name: str = "base"

    @abstractmethod
    def login(
        self,
        username: str,
        password: str,
        *,
        cancel: threading.Event | None = None,
    ) -> AuthOutcome: ...

    def attempt(self, credential: Credential, *, cancel: threading.Event | None = None) -> AuthOutcome:
        return self.login(credential.username, credential.password, cancel=cancel)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{self.__class__.__name__}()"
