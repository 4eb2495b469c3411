"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateEmailError(DomainError):
    """A user with the same email address already exists."""

    def __init__(self, message: str = "A user with this email address already exists"):
        super().__init__(message)


class CreationFailedError(DomainError):
    """The user store could not persist a new user."""

    def __init__(self, message: str = "Could not create account"):
        super().__init__(message)


class AccessDeniedError(DomainError):
    """Authentication failed.

    Raised for unknown users, wrong passwords, logged-out users and
    wrong or rotated refresh tokens alike, with one message for all.
    """

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class StoreUnavailableError(DomainError):
    """The user store could not be read or written.

    Distinct from AccessDeniedError so an outage is never reported as a
    credential failure.
    """

    def __init__(self, message: str = "Database unavailable"):
        super().__init__(message)
