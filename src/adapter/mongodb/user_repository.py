"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateEmailError, StoreUnavailableError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.db = db
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create the unique email index that backs duplicate detection."""
        try:
            self.collection.create_index([('email', 1)], name='idx_users_email', unique=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            hashed_refresh_token=doc.get('hashed_refresh_token'),
        )

    def create(self, email: str, password_hash: str) -> User | None:
        """Create a new user and return the User object.

        Relies on the unique email index; a duplicate key error (code 11000)
        is surfaced as DuplicateEmailError.
        """
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'hashed_refresh_token': None,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            # email is the only unique key besides _id
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateEmailError() from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            return None

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found.

        Raises StoreUnavailableError on driver errors.
        """
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise StoreUnavailableError() from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found.

        Raises StoreUnavailableError on driver errors.
        """
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError() from e
        return self._to_domain(doc) if doc else None

    def update_refresh_token_hash(self, user_id: str, token_hash: str | None) -> bool:
        """Set or clear the refresh token hash. Return True if the user exists.

        Clearing an already cleared hash matches no document for modification
        but still counts as success. Driver errors raise StoreUnavailableError.
        """
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {
                    'hashed_refresh_token': token_hash,
                    'updated_at': datetime.now(timezone.utc),
                }}
            )
        except PyMongoError as e:
            logger.error("Failed to update refresh token hash", extra={"userId": user_id, "error": str(e)})
            raise StoreUnavailableError() from e

        if result.matched_count == 0:
            logger.warning("Refresh token hash update matched no user", extra={"userId": user_id})
            return False
        logger.debug("Updated refresh token hash", extra={"userId": user_id, "cleared": token_hash is None})
        return True

    def ping(self) -> bool:
        try:
            self.db.client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed", extra={"error": str(e)[:200]})
            return False
