"""Exceptions raised by the registration workflow."""

from __future__ import annotations

from typing import Sequence

from .contracts import FieldError


class RegistrationRejected(ValueError):
    """The payload violated one or more registration rules."""

    def __init__(self, errors: Sequence[FieldError]) -> None:
        self.errors = tuple(errors)
        summary = ", ".join(f"{error.field}:{error.kind.value}" for error in self.errors)
        super().__init__(f"registration rejected ({summary})")


class EmailAlreadyRegistered(ValueError):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("email already registered")


class AccountServiceError(RuntimeError):
    """The account service failed or could not be reached."""


class AccountServiceNotConfigured(AccountServiceError):
    pass
