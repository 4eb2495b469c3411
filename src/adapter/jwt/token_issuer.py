"""JWT implementation of TokenIssuer (python-jose, HS256)."""

import logging
import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.tokens import TokenClaims, Tokens, TokenType
from utils.settings import TokenSettings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class JwtTokenIssuer:
    """Signs and verifies access/refresh tokens.

    Access and refresh tokens use separate secrets, so a token of one kind
    never verifies as the other. Each token also carries a ``type`` claim
    and a random ``jti`` so that two pairs issued within the same second
    are still distinct.
    """

    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def _sign(self, user_id: str, email: str, token_type: TokenType, secret: str, ttl: int) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "type": token_type.value,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + timedelta(seconds=ttl),
        }
        return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)

    def issue(self, user_id: str, email: str) -> Tokens:
        return Tokens(
            access_token=self._sign(
                user_id, email, TokenType.ACCESS,
                self.settings.access_token_secret,
                self.settings.access_token_expiration,
            ),
            refresh_token=self._sign(
                user_id, email, TokenType.REFRESH,
                self.settings.refresh_token_secret,
                self.settings.refresh_token_expiration,
            ),
        )

    def _decode(self, token: str, token_type: TokenType, secret: str) -> TokenClaims | None:
        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email or payload.get("type") != token_type.value:
            logger.debug("JWT rejected: missing claims or wrong token type")
            return None
        return TokenClaims(sub=user_id, email=email, exp=payload["exp"], type=token_type)

    def decode_access(self, token: str) -> TokenClaims | None:
        return self._decode(token, TokenType.ACCESS, self.settings.access_token_secret)

    def decode_refresh(self, token: str) -> TokenClaims | None:
        return self._decode(token, TokenType.REFRESH, self.settings.refresh_token_secret)
