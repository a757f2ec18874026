"""
Identity field rules for signup and account settings.
"""

import re

from caissier.domain.exceptions.base import ValidationError

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]{3,20}")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
PHONE_NUMBER_LENGTH = 10

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64
PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()-_=+[]{};:,.<>?/|\\`~"


def validate_username(username: str) -> str:
    """Usernames are 3-20 letters, digits or underscores."""
    if not USERNAME_PATTERN.fullmatch(username or ""):
        raise ValidationError(
            "username", "must be 3-20 letters, digits or underscores"
        )
    return username


def validate_email(email: str) -> str:
    """Validate email format and normalize to lowercase."""
    email = (email or "").strip()
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("email", "invalid email format")
    return email.lower()


def validate_phone_number(phone_number: str) -> str:
    """Phone numbers are exactly ten digits."""
    if (
        not phone_number
        or len(phone_number) != PHONE_NUMBER_LENGTH
        or not phone_number.isascii()
        or not phone_number.isdigit()
    ):
        raise ValidationError(
            "phone_number", f"must be exactly {PHONE_NUMBER_LENGTH} digits"
        )
    return phone_number


def validate_password(password: str) -> str:
    """
    Check password complexity.

    Rules:
    - 8 to 64 printable ASCII characters
    - At least one uppercase, one lowercase, one digit
    - At least one special character from PASSWORD_SPECIAL_CHARACTERS

    Raises:
        ValidationError: Naming the first rule that is broken
    """
    password = password or ""

    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise ValidationError(
            "password",
            f"must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters",
        )

    if not all(32 <= ord(ch) <= 126 for ch in password):
        raise ValidationError("password", "must use printable ASCII characters")

    checks = [
        (str.isupper, "an uppercase letter"),
        (str.islower, "a lowercase letter"),
        (str.isdigit, "a digit"),
        (lambda ch: ch in PASSWORD_SPECIAL_CHARACTERS, "a special character"),
    ]
    for predicate, label in checks:
        if not any(predicate(ch) for ch in password):
            raise ValidationError("password", f"must contain {label}")

    return password
