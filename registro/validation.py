"""Shape checks for the name, email and password of a registration."""
from __future__ import annotations

import re
from typing import List

_UPPER = "A-ZÁÉÍÓÚÑ"
_LOWER = "a-záéíóúñ"

NAME_PATTERN = re.compile(rf"[{_UPPER}][{_LOWER}]+(?: [{_UPPER}][{_LOWER}]+)*")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9_.%+-]+@[A-Za-z0-9_.-]+\.[A-Za-z]{2,6}")
# Any character except a line terminator.
_ANY = r"[^\n\r\x85\u2028\u2029]"

PASSWORD_PATTERN = re.compile(
    rf"(?={_ANY}*[A-Z]{_ANY}*[A-Z])"
    rf"(?={_ANY}*[a-z]{_ANY}*[a-z]{_ANY}*[a-z])"
    rf"(?={_ANY}*[0-9])"
    rf"(?={_ANY}*[^a-zA-Z0-9])"
    rf"{_ANY}{{8,}}"
)


def valid_name(value: str) -> bool:
    """Return ``True`` for one or more capitalised words separated by single spaces."""

    return NAME_PATTERN.fullmatch(value) is not None


def valid_email(value: str) -> bool:
    """Return ``True`` for a ``local@domain.tld`` address with a 2-6 letter TLD."""

    return EMAIL_PATTERN.fullmatch(value) is not None


def valid_password(value: str) -> bool:
    """Return ``True`` when the password meets every complexity requirement.

    At least eight characters, two uppercase letters, three lowercase letters,
    one digit and one character that is neither a letter nor a digit. The
    requirements are counted independently of each other.
    """

    return PASSWORD_PATTERN.fullmatch(value) is not None


def invalid_fields(name: str, email: str, password: str) -> List[str]:
    """Return the names of the fields that fail their check, in form order."""

    checks = (
        ("name", valid_name(name)),
        ("email", valid_email(email)),
        ("password", valid_password(password)),
    )
    return [field for field, ok in checks if not ok]


__all__ = [
    "EMAIL_PATTERN",
    "NAME_PATTERN",
    "PASSWORD_PATTERN",
    "invalid_fields",
    "valid_email",
    "valid_name",
    "valid_password",
]
