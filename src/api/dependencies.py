import logging
from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.argon2.credential_hasher import Argon2CredentialHasher
from adapter.jwt.token_issuer import JwtTokenIssuer
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.sqlalchemy.session import get_session_factory
from adapter.sqlalchemy.user_repository import SqlUserRepository
from port.credential_hasher import CredentialHasher
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository
from services.auth_service import AuthService
from utils.settings import TokenSettings, get_user_store_backend

logger = logging.getLogger(__name__)


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    if get_user_store_backend() == 'sql':
        try:
            session_factory = get_session_factory()
        except ValueError as e:
            logger.error("SQL user store is not configured", extra={"error": str(e)})
            raise HTTPException(status_code=503, detail="Database unavailable")
        return SqlUserRepository(session_factory)
    return MongoUserRepository(_get_db())


@lru_cache
def get_credential_hasher() -> CredentialHasher:
    return Argon2CredentialHasher()


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return JwtTokenIssuer(TokenSettings.from_env())


def get_auth_service(
    repo: UserRepository = Depends(get_user_repo),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(repo=repo, hasher=hasher, issuer=issuer)


def get_user_repo_or_none() -> UserRepository | None:
    """Like get_user_repo, but an unreachable or unconfigured store yields None instead of 503."""
    try:
        return get_user_repo()
    except (HTTPException, ValueError):
        return None
