"""Registration service orchestrating validation and the account service hand-off."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .contracts import RegistrationRequest, ValidationResult
from .errors import AccountServiceNotConfigured
from .validator import validate
from ..metrics import record_validation

logger = logging.getLogger(__name__)


class AccountGateway(Protocol):
    """Downstream collaborator that persists accounts and hashes passwords."""

    def create_account(
        self, request: RegistrationRequest, *, social_provider: str | None
    ) -> str:
        """Create the account and return its identifier."""
        ...


@dataclass(slots=True)
class Registration:
    """A request accepted by the account service."""

    account_id: str
    request: RegistrationRequest
    social_login: bool


class RegistrationService:
    """User registration workflows."""

    def __init__(self, gateway: AccountGateway | None = None) -> None:
        """Store the account gateway; ``None`` leaves the service in validate-only mode."""
        self._gateway = gateway

    def validate(self, payload: Any, *, social_provider: str | None) -> ValidationResult:
        """Validate a payload, recording the outcome without touching the gateway."""
        has_social_login = bool(social_provider)
        result = validate(payload, has_social_login)
        record_validation(result)
        if result.ok:
            logger.debug("registration payload accepted (social_login=%s)", has_social_login)
        else:
            logger.info(
                "registration payload rejected: %s",
                ", ".join(f"{error.field}:{error.kind.value}" for error in result.errors),
            )
        return result

    def register(self, payload: Any, *, social_provider: str | None) -> Registration:
        """Validate a payload and create the account.

        Raises
        ------
        RegistrationRejected
            When the payload violates any registration rule.
        AccountServiceNotConfigured
            When no account gateway was wired in.
        EmailAlreadyRegistered, AccountServiceError
            Propagated from the gateway.
        """
        request = self.validate(payload, social_provider=social_provider).unwrap()
        if self._gateway is None:
            raise AccountServiceNotConfigured("account service is not configured")

        account_id = self._gateway.create_account(request, social_provider=social_provider)
        logger.info(
            "registered account %s (domain=%s, social_provider=%s)",
            account_id,
            request.email.rsplit("@", 1)[-1],
            social_provider or "-",
        )
        return Registration(
            account_id=account_id,
            request=request,
            social_login=bool(social_provider),
        )
