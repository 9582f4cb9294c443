# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Okta primary-authentication probe driver."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..errors import ConfigError, ErrorCategory, NetworkError, ProtocolError, error_category_to_reason
from ..http.client import HttpClient
from ..http.models import HttpRequest, HttpResponse
from ..http.url import build_endpoint_url, validate_url_suffix
from ..models import AuthOutcome, Credential
from ..ratelimit import TokenBucketLimiter
from ..utils.context import get_probe_context
from .base import ProbeDriver

logger = logging.getLogger(__name__)

DRIVER_NAME = "okta"

OKTA_ROOT_DOMAIN = ".okta.com"
OKTA_AUTHN_URL_TEMPLATE = "https://{subdomain}.okta.com/api/v1/authn"

# Frozen Chrome UA, following the UA client hint freeze.
FROZEN_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/75.0.3764.0 Safari/537.36"
)

STATUS_LOCKED_OUT = "LOCKED_OUT"
STATUS_MFA_REQUIRED = "MFA_REQUIRED"


def _optional_str(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ProtocolError(f"okta response field {key!r} is not a string", status_code=200)


def _error_category(response: HttpResponse) -> ErrorCategory:
    try:
        return ErrorCategory(response.error_category or ErrorCategory.UNKNOWN_ERROR.value)
    except ValueError:
        return ErrorCategory.UNKNOWN_ERROR


def parse_authn_response(response: HttpResponse) -> AuthOutcome:
    """Classify a 200 response body from /api/v1/authn."""
    try:
        payload = json.loads(response.content or response.text)
    except (TypeError, ValueError) as exc:
        raise ProtocolError(f"okta returned an undecodable 200 body: {exc}", status_code=200) from exc
    if not isinstance(payload, dict):
        raise ProtocolError("okta returned a 200 body that is not a JSON object", status_code=200)

    status = _optional_str(payload, "status")
    factor_result = _optional_str(payload, "factorResult")
    embedded = payload.get("_embedded")
    if embedded is None:
        embedded = {}
    elif not isinstance(embedded, dict):
        raise ProtocolError("okta response field '_embedded' is not an object", status_code=200)

    return AuthOutcome(
        valid=status != STATUS_LOCKED_OUT,
        mfa_required=status == STATUS_MFA_REQUIRED,
        locked_out=status == STATUS_LOCKED_OUT,
        metadata=embedded,
        status=status,
        factor_result=factor_result,
    )


def classify_response(response: HttpResponse) -> AuthOutcome:
    """Map an Okta authn HTTP response onto an AuthOutcome or raise."""
    status_code = response.status_code
    if status_code == 200:
        return parse_authn_response(response)
    if status_code == 401:
        return AuthOutcome(valid=False)
    if status_code == 429:
        return AuthOutcome(rate_limited=True)
    raise ProtocolError(f"unhandled status code from okta provider: {status_code}", status_code=status_code)


@dataclass(frozen=True)
class OktaDriver(ProbeDriver):
    """
    Probe driver for Okta's primary authentication API.

    Holds no mutable state of its own; concurrent ``login`` calls only meet at
    the shared limiter.
    """

    organization_id: str
    http_client: HttpClient = field(repr=False, compare=False)
    limiter: TokenBucketLimiter = field(repr=False, compare=False)
    client_identity: str = FROZEN_USER_AGENT

    name = DRIVER_NAME

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, str],
        *,
        http_client: HttpClient,
        limiter: TokenBucketLimiter,
    ) -> OktaDriver:
        """
        Build a driver from orchestrator options.

        subdomain
            The Okta organization subdomain. A user logging in at
            example.okta.com has subdomain "example".

        The HTTP client and limiter are shared with every other driver the
        caller builds; the driver never creates or closes either.
        """
        subdomain = options.get("subdomain")
        if not subdomain:
            raise ConfigError("okta driver requires 'subdomain' config parameter")
        return cls(
            organization_id=subdomain,
            http_client=http_client,
            limiter=limiter,
        )

    def authn_url(self) -> str:
        url = build_endpoint_url(OKTA_AUTHN_URL_TEMPLATE, subdomain=self.organization_id)
        return validate_url_suffix(url, OKTA_ROOT_DOMAIN)

    def build_request(self, username: str, password: str) -> HttpRequest:
        return HttpRequest(
            url=self.authn_url(),
            method="POST",
            headers={
                "Content-Type": "application/json",
                "User-Agent": self.client_identity,
            },
            body=json.dumps(Credential(username, password).to_payload()),
        )

    def login(
        self,
        username: str,
        password: str,
        *,
        cancel: threading.Event | None = None,
    ) -> AuthOutcome:
        context = get_probe_context()
        if cancel is None:
            cancel = context.cancel
        self.limiter.acquire(cancel)

        request = self.build_request(username, password)
        if context.timeout is not None:
            request.timeout = context.timeout

        response = self.http_client.request(request)
        if not response.ok:
            category = _error_category(response)
            reason = error_category_to_reason(category)
            raise NetworkError(
                f"{reason}: {response.error_message or 'request failed'}",
                category=category,
            ) from response.error

        outcome = classify_response(response)
        logger.debug(
            "okta %s [%s]: status=%s valid=%s mfa=%s locked=%s rate_limited=%s",
            self.organization_id,
            context.correlation_id or "-",
            response.status_code,
            outcome.valid,
            outcome.mfa_required,
            outcome.locked_out,
            outcome.rate_limited,
        )
        return outcome


__all__ = [
    "DRIVER_NAME",
    "FROZEN_USER_AGENT",
    "OKTA_AUTHN_URL_TEMPLATE",
    "OKTA_ROOT_DOMAIN",
    "OktaDriver",
    "classify_response",
    "parse_authn_response",
]
