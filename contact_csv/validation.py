"""Field validators for contact records."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Pattern


class ValidationError(ValueError):
    """Raised when a field value violates its domain constraint."""


NAME_CONSTRAINTS = "Names should only contain alphanumeric characters and spaces, and it should not be blank"
PHONE_CONSTRAINTS = "Phone numbers should only contain numbers, and it should be at least 3 digits long"
EMAIL_CONSTRAINTS = (
    "Emails should be of the format local-part@domain. The local-part may contain letters, digits "
    "and the characters +_.- (not at the start or end); the domain must end with a label of at least "
    "2 characters"
)
ADDRESS_CONSTRAINTS = "Addresses can take any values, and it should not be blank"

_NAME_PATTERN = re.compile(r"[^\W_]+(?: +[^\W_]+)*")
_PHONE_PATTERN = re.compile(r"\d{3,}")
_EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9](?:[A-Za-z0-9+_.-]*[A-Za-z0-9])?"
    r"@"
    r"(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+"
    r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])"
)
_ADDRESS_PATTERN = re.compile(r"\S.*", re.DOTALL)

Validator = Callable[[str], str]


def _check(pattern: Pattern[str], value: str, message: str) -> str:
    if value is None or not pattern.fullmatch(value):
        raise ValidationError(message)
    return value


def validate_name(value: str) -> str:
    return _check(_NAME_PATTERN, value, NAME_CONSTRAINTS)


def validate_phone(value: str) -> str:
    return _check(_PHONE_PATTERN, value, PHONE_CONSTRAINTS)


def validate_email(value: str) -> str:
    return _check(_EMAIL_PATTERN, value, EMAIL_CONSTRAINTS)


def validate_address(value: str) -> str:
    return _check(_ADDRESS_PATTERN, value, ADDRESS_CONSTRAINTS)


@dataclass(frozen=True)
class Validators:
    """Bundle of field validators applied when a row becomes a record.

    Each callable receives the trimmed cell text and either returns the value to
    store or raises :class:`ValidationError` with a human readable reason.
    """

    name: Validator = validate_name
    phone: Validator = validate_phone
    email: Validator = validate_email
    address: Validator = validate_address


DEFAULT_VALIDATORS = Validators()


__all__ = [
    "ValidationError",
    "Validators",
    "DEFAULT_VALIDATORS",
    "validate_name",
    "validate_phone",
    "validate_email",
    "validate_address",
]
