"""Port definition for TokenIssuer."""

from typing import Protocol

from domain.model.tokens import TokenClaims, Tokens


class TokenIssuer(Protocol):
    def issue(self, user_id: str, email: str) -> Tokens:
        """Sign a fresh access/refresh token pair for the user."""
        ...

    def decode_access(self, token: str) -> TokenClaims | None:
        """Verify an access token. Return its claims or None if invalid."""
        ...

    def decode_refresh(self, token: str) -> TokenClaims | None:
        """Verify a refresh token. Return its claims or None if invalid."""
        ...
