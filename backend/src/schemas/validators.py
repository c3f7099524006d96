"""
Shared validation functions for Pydantic schemas.

Request bodies treat an empty string the same as a missing field, so
handlers can answer "Missing parameters" for both.
"""
from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator

# bcrypt ignores input past 72 bytes; refuse rather than silently truncate
PASSWORD_MAX_BYTES = 72


def empty_to_none(value: Any) -> Any:
    """Map "" to None; leave everything else for normal validation."""
    if isinstance(value, str) and value == "":
        return None
    return value


def normalize_email(value: str | None) -> str | None:
    """Trim and lowercase an email; blank becomes None."""
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized or None


def normalize_text(value: str | None) -> str | None:
    """Trim surrounding whitespace; blank becomes None."""
    if value is None:
        return None
    normalized = value.strip()
    return normalized or None


def validate_password_length(value: str | None) -> str | None:
    """Reject passwords bcrypt cannot represent in full."""
    if value is not None and len(value.encode()) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


OptionalEmail = Annotated[
    str | None, BeforeValidator(empty_to_none), AfterValidator(normalize_email),
]
OptionalText = Annotated[
    str | None, BeforeValidator(empty_to_none), AfterValidator(normalize_text),
]
OptionalPassword = Annotated[
    str | None, BeforeValidator(empty_to_none), AfterValidator(validate_password_length),
]
OptionalFloat = Annotated[float | None, BeforeValidator(empty_to_none)]
