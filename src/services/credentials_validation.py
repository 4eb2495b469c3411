"""Request-level validation of email/password input.

Runs before AuthService is invoked so the service only ever sees well-formed
strings. Errors are collected rather than raised one at a time, so callers can
report every problem at once.
"""

from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_credentials(email: Any, password: Any) -> ValidationResult:
    """Validate a register/login payload.

    The email is checked syntactically only. The password must be a
    non-empty string; no strength rules are enforced.
    """
    result = ValidationResult()
    if not _is_email(email):
        result.errors.append("email must be an email")
    if not isinstance(password, str):
        result.errors.append("password must be a string")
    if password is None or password == '':
        result.errors.append("password should not be empty")
    return result
