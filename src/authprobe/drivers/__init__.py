# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Built-in probe drivers."""

from .base import ProbeDriver
from .okta import DRIVER_NAME as OKTA_DRIVER_NAME
from .okta import OktaDriver

BUILTIN_DRIVERS = {
    OKTA_DRIVER_NAME: OktaDriver.from_options,
}

__all__ = ["BUILTIN_DRIVERS", "OktaDriver", "ProbeDriver"]
