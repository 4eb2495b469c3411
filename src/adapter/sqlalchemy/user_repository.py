"""SQLAlchemy implementation of UserRepository."""

from logging import getLogger

from sqlalchemy import select, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from adapter.sqlalchemy.models import UserRecord
from domain.model.errors import DuplicateEmailError, StoreUnavailableError
from domain.model.user import User

logger = getLogger(__name__)


class SqlUserRepository:
    """User store backed by a relational database.

    Each operation runs in its own short-lived session; every write is a
    single-row statement so no wider transaction is needed.
    Lookups and refresh hash updates raise StoreUnavailableError when the
    database fails; create reports such failures by returning None.
    """

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def _to_domain(self, record: UserRecord) -> User:
        return User(
            id=record.id,
            email=record.email,
            password_hash=record.password_hash,
            created_at=record.created_at,
            updated_at=record.updated_at,
            hashed_refresh_token=record.hashed_refresh_token,
        )

    def create(self, email: str, password_hash: str) -> User | None:
        """Insert a user row. The unique constraint on email reports duplicates."""
        try:
            with self.session_factory() as session:
                record = UserRecord(email=email, password_hash=password_hash)
                session.add(record)
                session.commit()
                user = self._to_domain(record)
        except IntegrityError as e:
            # Portable drivers don't agree on an error code; the only
            # unique column besides the primary key is email.
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user.id, "email": email})
        return user

    def get_by_email(self, email: str) -> User | None:
        try:
            with self.session_factory() as session:
                record = session.scalar(select(UserRecord).where(UserRecord.email == email))
                return self._to_domain(record) if record else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StoreUnavailableError() from e

    def get_by_id(self, user_id: str) -> User | None:
        try:
            with self.session_factory() as session:
                record = session.get(UserRecord, user_id)
                return self._to_domain(record) if record else None
        except SQLAlchemyError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError() from e

    def update_refresh_token_hash(self, user_id: str, token_hash: str | None) -> bool:
        try:
            with self.session_factory() as session:
                result = session.execute(
                    update(UserRecord)
                    .where(UserRecord.id == user_id)
                    .values(hashed_refresh_token=token_hash)
                )
                session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to update refresh token hash", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError() from e

        if result.rowcount == 0:
            logger.warning("Refresh token hash update matched no user", extra={"userId": user_id})
            return False
        logger.debug("Updated refresh token hash", extra={"userId": user_id, "cleared": token_hash is None})
        return True

    def ping(self) -> bool:
        try:
            with self.session_factory() as session:
                session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("SQL ping failed", extra={"error": str(e)[:200]})
            return False
