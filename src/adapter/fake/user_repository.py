"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.errors import DuplicateEmailError, StoreUnavailableError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.fail_next_create = False
        # Simulates an outage: lookups and updates raise, ping fails
        self.unavailable = False

    def _check_available(self):
        if self.unavailable:
            raise StoreUnavailableError()

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str) -> User | None:
        if any(u.email == email for u in self.store.values()):
            raise DuplicateEmailError()
        if self.fail_next_create:
            self.fail_next_create = False
            return None

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.store[user_id] = user
        return user

    def update_refresh_token_hash(self, user_id: str, token_hash: str | None) -> bool:
        self._check_available()
        user = self.store.get(user_id)
        if not user:
            return False

        user.hashed_refresh_token = token_hash
        user.updated_at = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        self._check_available()
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        self._check_available()
        return self.store.get(user_id)

    def ping(self) -> bool:
        return not self.unavailable
