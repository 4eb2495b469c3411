from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a locally registered user."""
    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    hashed_refresh_token: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.hashed_refresh_token)
