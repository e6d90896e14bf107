"""Validation of raw registration payloads into ``RegistrationRequest`` objects."""

from __future__ import annotations

from typing import Any, Mapping

from email_validator import EmailNotValidError, validate_email

from .contracts import FieldError, RegistrationRequest, ValidationResult

_MISSING = object()


def _lookup(payload: Any, key: str) -> Any:
    if not isinstance(payload, Mapping):
        return _MISSING
    value = payload.get(key, _MISSING)
    # JSON null is treated the same as an omitted key.
    return _MISSING if value is None else value


def _check_name(payload: Any, errors: list[FieldError]) -> str | None:
    value = _lookup(payload, "name")
    if value is _MISSING:
        errors.append(FieldError.missing("name"))
        return None
    if not isinstance(value, str):
        errors.append(FieldError.invalid("name"))
        return None
    name = value.strip()
    if not name:
        errors.append(FieldError.empty("name"))
        return None
    return name


def _check_email(payload: Any, errors: list[FieldError]) -> str | None:
    value = _lookup(payload, "email")
    if value is _MISSING:
        errors.append(FieldError.missing("email"))
        return None
    if not isinstance(value, str):
        errors.append(FieldError.invalid("email"))
        return None
    email = value.strip()
    if not email:
        errors.append(FieldError.missing("email"))
        return None
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        errors.append(FieldError.invalid("email"))
        return None
    # Special-use domains are allowed, single-label domains are not.
    if "." not in email.rpartition("@")[2]:
        errors.append(FieldError.invalid("email"))
        return None
    return email


def _check_password(
    payload: Any, has_social_login: bool, errors: list[FieldError]
) -> str | None:
    value = _lookup(payload, "password")
    if value is not _MISSING and not isinstance(value, str):
        errors.append(FieldError.invalid("password"))
        return None
    password = value.strip() if isinstance(value, str) else ""
    if password:
        return password
    if not has_social_login:
        errors.append(FieldError.missing("password"))
    return None


def validate(raw_payload: Any, has_social_login: bool) -> ValidationResult:
    """Validate a raw registration payload.

    Every rule is evaluated so the caller receives the complete list of
    violations, ordered name, email, password.

    Parameters
    ----------
    raw_payload:
        Parsed request body. Anything other than a mapping is treated as a
        payload with no fields.
    has_social_login:
        ``True`` when a social identity credential accompanies the request, in
        which case the password becomes optional.

    Returns
    -------
    ValidationResult
        Either the normalized request or the ordered violations, never both.
    """

    errors: list[FieldError] = []
    name = _check_name(raw_payload, errors)
    email = _check_email(raw_payload, errors)
    password = _check_password(raw_payload, has_social_login, errors)

    if errors:
        return ValidationResult(errors=tuple(errors))
    return ValidationResult(
        request=RegistrationRequest(name=name, email=email, password=password)
    )
