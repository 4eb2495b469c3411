"""Bearer-token guards for protected auth routes.

Access tokens and refresh tokens are signed with different secrets, so each
guard accepts only its own kind. Any failure is a bare 401 "Unauthorized".
"""

import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_issuer
from domain.model.tokens import TokenClaims
from port.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RefreshTokenPrincipal:
    """Verified refresh token together with the raw token string."""
    claims: TokenClaims
    refresh_token: str


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Subject of a valid access token. Raises 401 otherwise."""
    if not credentials:
        raise _unauthorized()

    claims = issuer.decode_access(credentials.credentials)
    if not claims:
        raise _unauthorized()
    return claims.sub


def get_refresh_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> RefreshTokenPrincipal:
    """Claims and raw token of a valid refresh token. Raises 401 otherwise."""
    if not credentials:
        raise _unauthorized()

    token = credentials.credentials
    claims = issuer.decode_refresh(token)
    if not claims:
        raise _unauthorized()
    return RefreshTokenPrincipal(claims=claims, refresh_token=token)
