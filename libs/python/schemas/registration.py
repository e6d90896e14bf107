"""Registration DTOs shared across services and published in the OpenAPI docs."""

from __future__ import annotations

from enum import Enum
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class FailureKind(str, Enum):
    missing_field = "missing_field"
    empty_field = "empty_field"
    invalid_format = "invalid_format"


class RegistrationPayload(BaseModel):
    """Documented shape of the body accepted by ``POST /v1/users``."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(
        ...,
        description=(
            "Display name used anywhere the signed-in person is shown "
            "(profile, home page, etc)."
        ),
        examples=["Paulo Salvatore"],
    )
    email: EmailStr = Field(
        ...,
        description=(
            "Login identifier. It does not need to match the email of a linked "
            "social network. Logging in without a social network requires a password."
        ),
        examples=["email@email.com"],
    )
    password: str | None = Field(
        default=None,
        description=(
            "Optional when signing up through a social network; required to log in "
            "with the email directly."
        ),
        examples=["123@abc"],
    )


class FieldViolation(BaseModel):
    field: str
    kind: FailureKind
    message: str

    model_config = ConfigDict(use_enum_values=True)


class RegistrationRejected(BaseModel):
    """Envelope listing every rule a registration payload violated."""

    errors: list[FieldViolation]


class ValidatedRegistration(BaseModel):
    name: str
    email: str
    has_password: bool
    social_login: bool


class RegisteredUser(ValidatedRegistration):
    """Account created by the account service from a validated registration."""

    account_id: str
