"""Argon2id implementation of CredentialHasher."""

import secrets
from functools import cached_property
from logging import getLogger

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

logger = getLogger(__name__)


class Argon2CredentialHasher:
    """Hashes passwords and refresh tokens with Argon2id.

    Each call to hash() draws a fresh random salt, so identical inputs
    produce different hashes.
    """

    def __init__(
        self,
        time_cost: int | None = None,
        memory_cost: int | None = None,
        parallelism: int | None = None,
    ):
        params = {
            'time_cost': time_cost,
            'memory_cost': memory_cost,
            'parallelism': parallelism,
        }
        self._hasher = PasswordHasher(**{k: v for k, v in params.items() if v is not None})

    @cached_property
    def dummy_hash(self) -> str:
        # Shares the cost parameters of real hashes.
        return self._hasher.hash(secrets.token_urlsafe(32))

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify(self, hashed: str | None, plaintext: str) -> bool:
        if not hashed:
            return False
        try:
            return self._hasher.verify(hashed, plaintext)
        except VerificationError:
            return False
        except InvalidHashError:
            logger.warning("Stored hash is not a valid argon2 hash")
            return False
