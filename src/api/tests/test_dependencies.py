"""Unit tests for API dependencies — user store selection and service wiring."""

import os
import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from adapter.argon2.credential_hasher import Argon2CredentialHasher
from adapter.jwt.token_issuer import JwtTokenIssuer
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.sqlalchemy.user_repository import SqlUserRepository
from api.dependencies import (
    DATABASE_NAME,
    get_auth_service,
    get_credential_hasher,
    get_token_issuer,
    get_user_repo,
    get_user_repo_or_none,
)
from services.auth_service import AuthService


class TestGetUserRepo(unittest.TestCase):

    @patch.dict(os.environ, {'USER_STORE': 'mongodb'})
    @patch('api.dependencies.get_mongodb_client')
    def test_returns_mongo_repository_when_connected(self, mock_get_client):
        mock_client = MagicMock()
        mock_db = MagicMock()
        mock_client.__getitem__.return_value = mock_db
        mock_get_client.return_value = mock_client

        repo = get_user_repo()

        self.assertIsInstance(repo, MongoUserRepository)
        mock_client.__getitem__.assert_called_with(DATABASE_NAME)

    @patch.dict(os.environ, {'USER_STORE': 'mongodb'})
    @patch('api.dependencies.get_mongodb_client')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_client):
        mock_get_client.return_value = None

        with self.assertRaises(HTTPException) as context:
            get_user_repo()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")

    @patch.dict(os.environ, {'USER_STORE': 'mongodb'})
    @patch('api.dependencies.get_mongodb_client')
    def test_or_none_variant_swallows_503(self, mock_get_client):
        mock_get_client.return_value = None

        self.assertIsNone(get_user_repo_or_none())

    @patch.dict(os.environ, {'USER_STORE': 'sql'})
    @patch('api.dependencies.get_session_factory')
    def test_returns_sql_repository_when_configured(self, mock_factory):
        repo = get_user_repo()

        self.assertIsInstance(repo, SqlUserRepository)
        mock_factory.assert_called_once()

    @patch.dict(os.environ, {'USER_STORE': 'sql'})
    @patch('api.dependencies.get_session_factory')
    def test_raises_503_when_database_url_missing(self, mock_factory):
        mock_factory.side_effect = ValueError("DATABASE_URL environment variable is required when USER_STORE=sql")

        with self.assertRaises(HTTPException) as context:
            get_user_repo()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")

    @patch.dict(os.environ, {'USER_STORE': 'sql'})
    @patch('api.dependencies.get_session_factory')
    def test_or_none_variant_swallows_missing_database_url(self, mock_factory):
        mock_factory.side_effect = ValueError("DATABASE_URL environment variable is required when USER_STORE=sql")

        self.assertIsNone(get_user_repo_or_none())

    @patch.dict(os.environ, {'USER_STORE': 'cassandra'})
    def test_unknown_backend_rejected(self):
        with self.assertRaises(ValueError):
            get_user_repo()

    def test_sql_repository_exposes_protocol_methods(self):
        repo = SqlUserRepository(MagicMock())
        for method in ('create', 'get_by_email', 'get_by_id', 'update_refresh_token_hash', 'ping'):
            self.assertTrue(hasattr(repo, method), f"SqlUserRepository missing protocol method: {method}")


class TestServiceWiring(unittest.TestCase):

    def tearDown(self):
        get_token_issuer.cache_clear()
        get_credential_hasher.cache_clear()

    @patch.dict(os.environ, {
        'ACCESS_TOKEN_SECRET': 'at-secret',
        'REFRESH_TOKEN_SECRET': 'rt-secret',
        'ACCESS_TOKEN_EXPIRATION': '15m',
        'REFRESH_TOKEN_EXPIRATION': '30d',
    })
    def test_token_issuer_built_from_environment(self):
        get_token_issuer.cache_clear()

        issuer = get_token_issuer()

        self.assertIsInstance(issuer, JwtTokenIssuer)
        self.assertEqual(issuer.settings.access_token_expiration, 900)
        self.assertEqual(issuer.settings.refresh_token_expiration, 30 * 86400)
        self.assertIs(get_token_issuer(), issuer)

    @patch.dict(os.environ, {}, clear=True)
    def test_token_issuer_requires_secrets(self):
        get_token_issuer.cache_clear()

        with self.assertRaises(ValueError):
            get_token_issuer()

    def test_credential_hasher_is_argon2(self):
        self.assertIsInstance(get_credential_hasher(), Argon2CredentialHasher)

    def test_auth_service_receives_collaborators(self):
        repo, hasher, issuer = MagicMock(), MagicMock(), MagicMock()

        service = get_auth_service(repo=repo, hasher=hasher, issuer=issuer)

        self.assertIsInstance(service, AuthService)
        self.assertIs(service.repo, repo)
        self.assertIs(service.hasher, hasher)
        self.assertIs(service.issuer, issuer)


if __name__ == '__main__':
    unittest.main()
