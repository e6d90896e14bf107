from __future__ import annotations

import pytest

from schemas import FailureKind as WireFailureKind

from app.domain.contracts import FailureKind, FieldError, RegistrationRequest, ValidationResult
from app.domain.errors import RegistrationRejected
from app.domain.validator import validate


def test_direct_signup_with_password_is_accepted():
    result = validate(
        {"name": "Paulo Salvatore", "email": "email@email.com", "password": "123@abc"},
        has_social_login=False,
    )
    assert result.ok
    assert result.errors == ()
    assert result.request == RegistrationRequest(
        name="Paulo Salvatore", email="email@email.com", password="123@abc"
    )


def test_empty_name_is_reported():
    result = validate(
        {"name": "", "email": "email@email.com", "password": "123@abc"},
        has_social_login=False,
    )
    assert not result.ok
    assert result.request is None
    assert result.errors == (FieldError.empty("name"),)


def test_invalid_email_is_reported_for_social_signup():
    result = validate({"name": "Ana", "email": "not-an-email"}, has_social_login=True)
    assert result.errors == (FieldError.invalid("email"),)


def test_password_required_without_social_login():
    result = validate({"name": "Ana", "email": "ana@example.com"}, has_social_login=False)
    assert result.errors == (FieldError.missing("password"),)


def test_password_optional_with_social_login():
    result = validate({"name": "Ana", "email": "ana@example.com"}, has_social_login=True)
    assert result.ok
    assert result.request.password is None
    assert not result.request.has_password


def test_social_signup_may_also_set_password():
    result = validate(
        {"name": "Ana", "email": "ana@example.com", "password": "s3cret"},
        has_social_login=True,
    )
    assert result.request.password == "s3cret"


def test_all_violations_reported_in_field_order():
    result = validate({"name": "   ", "password": ""}, has_social_login=False)
    assert result.errors == (
        FieldError.empty("name"),
        FieldError.missing("email"),
        FieldError.missing("password"),
    )


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"email": "ana@example.com", "password": "x"}, [FieldError.missing("name")]),
        ({"name": "Ana", "password": "x"}, [FieldError.missing("email")]),
        ({"password": "x"}, [FieldError.missing("name"), FieldError.missing("email")]),
        ({"name": None, "email": None, "password": "x"}, [FieldError.missing("name"), FieldError.missing("email")]),
        ({"name": "Ana", "email": "  ", "password": "x"}, [FieldError.missing("email")]),
    ],
)
def test_missing_identity_fields(payload, expected):
    result = validate(payload, has_social_login=False)
    assert list(result.errors) == expected
    assert result.request is None


@pytest.mark.parametrize("email", ["ana", "ana@", "@example.com", "ana@example", "ana@localhost", "ana@@example.com"])
def test_malformed_emails_are_invalid_format(email):
    result = validate({"name": "Ana", "email": email}, has_social_login=True)
    assert result.errors == (FieldError(field="email", kind=FailureKind.invalid_format),)


@pytest.mark.parametrize("password", ["", "   ", None])
def test_blank_password_counts_as_absent(password):
    payload = {"name": "Ana", "email": "ana@example.com", "password": password}
    assert validate(payload, has_social_login=False).errors == (FieldError.missing("password"),)
    assert validate(payload, has_social_login=True).request.password is None


def test_values_are_trimmed():
    result = validate(
        {"name": "  Ana Lima ", "email": " ana@example.com\t", "password": " pw "},
        has_social_login=False,
    )
    assert result.request == RegistrationRequest(
        name="Ana Lima", email="ana@example.com", password="pw"
    )


def test_non_string_values_are_invalid_format():
    result = validate({"name": 42, "email": ["a@b.com"], "password": 123}, has_social_login=False)
    assert result.errors == (
        FieldError.invalid("name"),
        FieldError.invalid("email"),
        FieldError.invalid("password"),
    )


@pytest.mark.parametrize("payload", [None, [], "name=Ana", 7])
def test_non_mapping_payload_has_no_fields(payload):
    result = validate(payload, has_social_login=False)
    assert result.errors == (
        FieldError.missing("name"),
        FieldError.missing("email"),
        FieldError.missing("password"),
    )


def test_unknown_keys_are_ignored():
    result = validate(
        {"name": "Ana", "email": "ana@example.com", "role": "admin"}, has_social_login=True
    )
    assert result.request == RegistrationRequest(name="Ana", email="ana@example.com")


def test_validation_is_repeatable():
    payload = {"name": "Ana", "email": "ana@example.com"}
    assert validate(payload, False) == validate(payload, False)
    assert validate(payload, True) == validate(payload, True)
    assert payload == {"name": "Ana", "email": "ana@example.com"}


def test_unwrap_raises_with_all_errors():
    result = validate({}, has_social_login=True)
    with pytest.raises(RegistrationRejected) as excinfo:
        result.unwrap()
    assert excinfo.value.errors == (FieldError.missing("name"), FieldError.missing("email"))


def test_request_repr_hides_password():
    request = RegistrationRequest(name="Ana", email="ana@example.com", password="123@abc")
    assert "123@abc" not in repr(request)
    assert FieldError.missing("password").message == "password is required"


@pytest.mark.parametrize("email", ["ana@mail.test", "ana@corp.local", "Ana@Example.COM"])
def test_syntactically_valid_emails_are_accepted_unchanged(email):
    result = validate({"name": "Ana", "email": email}, has_social_login=True)
    assert result.ok
    assert result.request.email == email


def test_result_requires_exactly_one_outcome():
    with pytest.raises(ValueError):
        ValidationResult()
    with pytest.raises(ValueError):
        ValidationResult(
            request=RegistrationRequest(name="Ana", email="ana@example.com"),
            errors=(FieldError.missing("password"),),
        )


def test_failure_kinds_share_the_wire_enum():
    assert FailureKind is WireFailureKind
    assert FieldError.empty("name").kind.value == "empty_field"
