"""Port definition for CredentialHasher."""

from typing import Protocol


class CredentialHasher(Protocol):
    def hash(self, plaintext: str) -> str: ...

    def verify(self, hashed: str | None, plaintext: str) -> bool: ...

    @property
    def dummy_hash(self) -> str:
        """A valid hash of a random secret, verified against when no user matches."""
        ...
