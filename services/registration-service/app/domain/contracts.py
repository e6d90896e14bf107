"""Domain-level request contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass, field

from schemas import FailureKind

_MESSAGES = {
    FailureKind.missing_field: "{field} is required",
    FailureKind.empty_field: "{field} must not be blank",
    FailureKind.invalid_format: "{field} is not valid",
}


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single violated registration rule."""

    field: str
    kind: FailureKind

    @classmethod
    def missing(cls, name: str) -> "FieldError":
        return cls(name, FailureKind.missing_field)

    @classmethod
    def empty(cls, name: str) -> "FieldError":
        return cls(name, FailureKind.empty_field)

    @classmethod
    def invalid(cls, name: str) -> "FieldError":
        return cls(name, FailureKind.invalid_format)

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind].format(field=self.field)


@dataclass(frozen=True, slots=True)
class RegistrationRequest:
    """Validated inputs required to create a user account."""

    name: str
    email: str
    password: str | None = field(default=None, repr=False)

    @property
    def has_password(self) -> bool:
        return self.password is not None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one registration payload.

    Exactly one of ``request`` and ``errors`` is populated.
    """

    request: RegistrationRequest | None = None
    errors: tuple[FieldError, ...] = ()

    def __post_init__(self) -> None:
        if (self.request is None) == (not self.errors):
            raise ValueError("exactly one of request and errors must be set")

    @property
    def ok(self) -> bool:
        return self.request is not None

    def unwrap(self) -> RegistrationRequest:
        """Return the validated request or raise ``RegistrationRejected``."""
        from .errors import RegistrationRejected

        if self.request is None:
            raise RegistrationRejected(self.errors)
        return self.request
