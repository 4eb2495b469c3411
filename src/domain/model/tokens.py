from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    ACCESS = 'access'
    REFRESH = 'refresh'


@dataclass(frozen=True)
class Tokens:
    """Access/refresh token pair handed back to the client. Never persisted."""
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims extracted from an inbound token."""
    sub: str
    email: str
    exp: int
    type: TokenType
