"""
Structural validation for user payloads.

The rules are declared once in USER_FIELD_RULES and evaluated by
validate_user(), which returns every problem it finds as (field, message)
pairs. Nothing here touches the database; uniqueness is checked by the
user service after structural validation passes.
"""

import re
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional
import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic.alias_generators import to_camel

# Digits, spaces and ( ) . - with an optional leading +, at least one digit,
# and an optional trailing extension such as "x12", "ext 12" or "ext. 12"
PHONE_PATTERN = re.compile(
    r"^\+?[\d\s().\-]*\d[\d\s().\-]*(?:\s*(?:ext\.?|x)\s*\d+)?$",
    re.IGNORECASE,
)

# Only address syntax is checked; reserved names such as localhost, .local and
# .test are well-formed domains
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


class FieldError(NamedTuple):
    field: str
    message: str


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone(value: str) -> bool:
    return PHONE_PATTERN.match(value.strip()) is not None


@dataclass(frozen=True)
class FieldRule:
    label: str
    required: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    min_length_message: Optional[str] = None
    is_valid: Optional[Callable[[str], bool]] = None


USER_FIELD_RULES = {
    "first_name": FieldRule("First name", required=True, max_length=50),
    "last_name": FieldRule("Last name", required=True, max_length=50),
    "email": FieldRule("Email", required=True, max_length=100, is_valid=is_valid_email),
    "phone": FieldRule("Phone", required=True, is_valid=is_valid_phone),
    "street_address": FieldRule("Street address", required=True, max_length=150),
    "city": FieldRule("City", max_length=50),
    "state": FieldRule("State", max_length=50),
    "user_name": FieldRule("Username", required=True, max_length=50),
    "password": FieldRule(
        "Password",
        required=True,
        min_length=6,
        min_length_message="Password must be at least 6 characters.",
    ),
}


def _check_field(rule: FieldRule, value: Optional[str]) -> list[str]:
    if value is None or not value.strip():
        if rule.required:
            return [f"{rule.label} is required."]
        if value is None:
            return []

    messages = []
    if rule.max_length is not None and len(value) > rule.max_length:
        messages.append(f"{rule.label} cannot be longer than {rule.max_length} characters.")
    if rule.min_length is not None and len(value) < rule.min_length:
        messages.append(
            rule.min_length_message
            or f"{rule.label} must be at least {rule.min_length} characters."
        )
    if rule.is_valid is not None and not rule.is_valid(value):
        messages.append(f"{rule.label} is invalid.")
    return messages


def validate_user(payload) -> list[FieldError]:
    """Return every structural problem with a user payload, empty when valid"""
    errors = []
    for attribute, rule in USER_FIELD_RULES.items():
        for message in _check_field(rule, getattr(payload, attribute, None)):
            errors.append(FieldError(to_camel(attribute), message))
    return errors


def errors_by_field(errors: list[FieldError]) -> dict[str, list[str]]:
    """Group field errors into the {field: [messages]} shape used in 400 responses"""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped
