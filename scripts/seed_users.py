#!/usr/bin/env python3
"""Seed the configured user store with demo accounts.

Passwords are stored as argon2 hashes, never as plaintext.

Usage:
    python scripts/seed_users.py
    python scripts/seed_users.py --user alice@example.com:Secret123
"""

import argparse
import sys
sys.path.insert(0, "src")

from dotenv import load_dotenv

load_dotenv()

from adapter.argon2.credential_hasher import Argon2CredentialHasher
from domain.model.errors import DuplicateEmailError
from port.credential_hasher import CredentialHasher
from port.user_repository import UserRepository
from utils.settings import get_user_store_backend

DEFAULT_USERS = [
    ("marco@template.com", "marco@template!"),
    ("jess@template.com", "jess@template!"),
]


def build_user_repo() -> UserRepository:
    if get_user_store_backend() == 'sql':
        from adapter.sqlalchemy.session import create_tables, get_engine, get_session_factory
        from adapter.sqlalchemy.user_repository import SqlUserRepository
        create_tables(get_engine())
        return SqlUserRepository(get_session_factory())

    from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
    from adapter.mongodb.user_repository import MongoUserRepository
    client = get_mongodb_client()
    if client is None:
        raise SystemExit("MongoDB unavailable (is MONGO_URL set?)")
    repo = MongoUserRepository(client[DATABASE_NAME])
    repo.ensure_indexes()
    return repo


def seed(repo: UserRepository, hasher: CredentialHasher, users: list[tuple[str, str]]) -> int:
    """Create each user unless the email already exists. Return how many were created."""
    created = 0
    for email, password in users:
        try:
            user = repo.create(email=email, password_hash=hasher.hash(password))
        except DuplicateEmailError:
            print(f"  skip   {email} (already exists)")
            continue
        if user is None:
            print(f"  FAILED {email}")
            continue
        print(f"  create {email} ({user.id})")
        created += 1
    return created


def parse_user(value: str) -> tuple[str, str]:
    email, sep, password = value.partition(":")
    if not sep or not email or not password:
        raise argparse.ArgumentTypeError(f"expected EMAIL:PASSWORD, got {value!r}")
    return email, password


def main():
    parser = argparse.ArgumentParser(description="Seed demo users")
    parser.add_argument(
        "--user", dest="users", action="append", type=parse_user, metavar="EMAIL:PASSWORD",
        help="User to create (repeatable). Defaults to the built-in demo users.",
    )
    args = parser.parse_args()

    users = args.users or DEFAULT_USERS
    print(f"Seeding {len(users)} user(s) into {get_user_store_backend()} store...")
    created = seed(build_user_repo(), Argon2CredentialHasher(), users)
    print(f"Done: {created} created")


if __name__ == "__main__":
    main()
