"""HTTP client for the downstream account service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .domain.contracts import RegistrationRequest
from .domain.errors import AccountServiceError, EmailAlreadyRegistered

logger = logging.getLogger(__name__)


def build_http_client(base_url: str, timeout_seconds: float) -> httpx.Client:
    """Create the shared ``httpx.Client`` used to reach the account service."""
    return httpx.Client(
        base_url=base_url,
        timeout=httpx.Timeout(timeout_seconds),
        headers={"Accept": "application/json"},
    )


class HttpAccountGateway:
    """Account gateway that creates accounts through ``POST /v1/accounts``."""

    def __init__(self, client: httpx.Client) -> None:
        """Store the HTTP client; its lifecycle is owned by the caller."""
        self._client = client

    def create_account(
        self, request: RegistrationRequest, *, social_provider: str | None
    ) -> str:
        body: dict[str, Any] = {"name": request.name, "email": request.email}
        if request.password is not None:
            body["password"] = request.password
        if social_provider:
            body["social_provider"] = social_provider

        try:
            response = self._client.post("/v1/accounts", json=body)
        except httpx.HTTPError as exc:
            logger.warning("account service unreachable: %s", exc)
            raise AccountServiceError("account service unreachable") from exc

        if response.status_code == httpx.codes.CONFLICT:
            raise EmailAlreadyRegistered(request.email)
        try:
            response.raise_for_status()
            account_id = response.json()["account_id"]
        except httpx.HTTPStatusError as exc:
            logger.warning("account service returned %s", response.status_code)
            raise AccountServiceError(
                f"account service returned {response.status_code}"
            ) from exc
        except (ValueError, KeyError, TypeError) as exc:
            raise AccountServiceError("account service returned an invalid body") from exc
        return str(account_id)
