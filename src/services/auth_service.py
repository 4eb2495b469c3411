"""Auth service — local registration, login, logout and refresh-token rotation.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.

Each user holds at most one refresh token hash. Login, registration and
refresh all overwrite it, so presenting any earlier refresh token fails.
"""

import logging

from domain.model.errors import AccessDeniedError, CreationFailedError, StoreUnavailableError
from domain.model.tokens import Tokens
from domain.model.user import User
from port.credential_hasher import CredentialHasher
from port.token_issuer import TokenIssuer
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository, hasher: CredentialHasher, issuer: TokenIssuer):
        self.repo = repo
        self.hasher = hasher
        self.issuer = issuer

    def _issue_and_store(self, user: User) -> Tokens:
        """Issue a pair and persist its refresh hash. Tokens are only returned once stored.

        Raises:
            StoreUnavailableError: the hash could not be written
        """
        tokens = self.issuer.issue(user.id, user.email)
        stored = self.repo.update_refresh_token_hash(user.id, self.hasher.hash(tokens.refresh_token))
        if not stored:
            logger.error("Refresh token hash was not persisted", extra={"userId": user.id})
            raise StoreUnavailableError()
        return tokens

    def register(self, email: str, password: str) -> Tokens:
        """Create a user and log them in.

        Raises:
            DuplicateEmailError: email already registered
            CreationFailedError: the store failed for any other reason,
                including while saving the first refresh token hash
        """
        password_hash = self.hasher.hash(password)
        user = self.repo.create(email=email, password_hash=password_hash)
        if not user:
            raise CreationFailedError()

        try:
            tokens = self._issue_and_store(user)
        except StoreUnavailableError as e:
            raise CreationFailedError() from e
        logger.info("User registered", extra={"userId": user.id, "email": email})
        return tokens

    def login(self, email: str, password: str) -> Tokens:
        """Authenticate by email and password.

        Unknown email and wrong password raise the same AccessDeniedError,
        and both pay for one hash verification.

        Raises:
            AccessDeniedError: unknown email or wrong password
            StoreUnavailableError: the store could not be read or written
        """
        user = self.repo.get_by_email(email)
        password_hash = user.password_hash if user else self.hasher.dummy_hash
        verified = self.hasher.verify(password_hash, password)
        if not user or not verified:
            logger.info("Login rejected", extra={"email": email})
            raise AccessDeniedError()

        tokens = self._issue_and_store(user)
        logger.info("User logged in", extra={"userId": user.id, "email": email})
        return tokens

    def logout(self, user_id: str) -> None:
        """Forget the user's refresh token. Safe to call when already logged out."""
        self.repo.update_refresh_token_hash(user_id, None)
        logger.info("User logged out", extra={"userId": user_id})

    def refresh_tokens(self, user_id: str, refresh_token: str) -> Tokens:
        """Rotate the refresh token.

        Raises:
            AccessDeniedError: unknown user, logged out, or token does not
                match the stored hash (including previously rotated tokens)
            StoreUnavailableError: the store could not be read or written
        """
        user = self.repo.get_by_id(user_id)
        if not user or not user.is_logged_in:
            logger.info("Refresh rejected: no active session", extra={"userId": user_id})
            raise AccessDeniedError()

        if not self.hasher.verify(user.hashed_refresh_token, refresh_token):
            logger.warning("Refresh rejected: token mismatch", extra={"userId": user_id})
            raise AccessDeniedError()

        tokens = self._issue_and_store(user)
        logger.info("Tokens refreshed", extra={"userId": user_id})
        return tokens
