"""Shared schema exports."""

from .registration import (
    FailureKind,
    FieldViolation,
    RegisteredUser,
    RegistrationPayload,
    RegistrationRejected,
    ValidatedRegistration,
)

__all__ = [
    "FailureKind",
    "FieldViolation",
    "RegisteredUser",
    "RegistrationPayload",
    "RegistrationRejected",
    "ValidatedRegistration",
]
