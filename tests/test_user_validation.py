import pytest
from user_api.schemas.user import UserPayload
from user_api.services.user_validation import (
    FieldError,
    errors_by_field,
    is_valid_email,
    is_valid_phone,
    validate_user,
)


def test_valid_payload_has_no_errors(user_data):
    assert validate_user(UserPayload(**user_data())) == []


def test_city_and_state_are_optional(user_data):
    payload = UserPayload(**user_data(city=None, state=None))
    assert validate_user(payload) == []


def test_missing_required_fields_are_reported():
    errors = validate_user(UserPayload())
    fields = {error.field for error in errors}
    assert fields == {
        "firstName",
        "lastName",
        "email",
        "phone",
        "streetAddress",
        "userName",
        "password",
    }
    assert FieldError("email", "Email is required.") in errors
    assert FieldError("userName", "Username is required.") in errors


def test_whitespace_only_counts_as_missing(user_data):
    errors = validate_user(UserPayload(**user_data(firstName="   ")))
    assert errors == [FieldError("firstName", "First name is required.")]


@pytest.mark.parametrize(
    "field,limit,label",
    [
        ("firstName", 50, "First name"),
        ("lastName", 50, "Last name"),
        ("streetAddress", 150, "Street address"),
        ("city", 50, "City"),
        ("state", 50, "State"),
        ("userName", 50, "Username"),
    ],
)
def test_max_length(user_data, field, limit, label):
    assert validate_user(UserPayload(**user_data(**{field: "a" * limit}))) == []

    errors = validate_user(UserPayload(**user_data(**{field: "a" * (limit + 1)})))
    assert errors == [FieldError(field, f"{label} cannot be longer than {limit} characters.")]


def test_email_too_long_is_reported(user_data):
    email = "a" * 95 + "@x.com"
    errors = validate_user(UserPayload(**user_data(email=email)))
    assert FieldError("email", "Email cannot be longer than 100 characters.") in errors


@pytest.mark.parametrize("email", ["not-an-email", "missing@", "@x.com", "a@@x.com"])
def test_invalid_email(user_data, email):
    errors = validate_user(UserPayload(**user_data(email=email)))
    assert errors == [FieldError("email", "Email is invalid.")]


@pytest.mark.parametrize(
    "phone",
    ["5551234567", "+1 (555) 123-4567", "555.123.4567", "555-1234 x12", "555 1234 ext. 9"],
)
def test_valid_phone(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["call me", "()-", "555-CALL-NOW", "+"])
def test_invalid_phone(user_data, phone):
    errors = validate_user(UserPayload(**user_data(phone=phone)))
    assert errors == [FieldError("phone", "Phone is invalid.")]


def test_short_password(user_data):
    errors = validate_user(UserPayload(**user_data(password="12345")))
    assert errors == [FieldError("password", "Password must be at least 6 characters.")]

    assert validate_user(UserPayload(**user_data(password="123456"))) == []


def test_errors_by_field_groups_messages():
    errors = [
        FieldError("email", "Email cannot be longer than 100 characters."),
        FieldError("email", "Email is invalid."),
        FieldError("phone", "Phone is invalid."),
    ]
    assert errors_by_field(errors) == {
        "email": ["Email cannot be longer than 100 characters.", "Email is invalid."],
        "phone": ["Phone is invalid."],
    }


@pytest.mark.parametrize("email", ["user@localhost", "a@host", "a@host.local", "a@b.test"])
def test_email_syntax_only(user_data, email):
    assert is_valid_email(email)
    assert validate_user(UserPayload(**user_data(email=email))) == []
