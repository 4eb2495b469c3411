from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Lookups and updates raise StoreUnavailableError when the backing store
    fails, so a missing user is never confused with an outage.
    """
    def create(self, email: str, password_hash: str) -> User | None:
        """Create a new user. Return User or None if creation failed.

        Raises DuplicateEmailError when the email is already taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update_refresh_token_hash(self, user_id: str, token_hash: str | None) -> bool:
        """Set or clear (None) the stored refresh token hash. Return False if no user matched."""
        ...

    def ping(self) -> bool:
        """Return True if the backing store is reachable."""
        ...
