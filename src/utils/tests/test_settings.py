"""Tests for environment-backed settings."""

import os
import unittest
from unittest.mock import patch

from utils.settings import (
    DEFAULT_ACCESS_TOKEN_EXPIRATION,
    TokenSettings,
    get_user_store_backend,
    parse_duration,
)


class TestParseDuration(unittest.TestCase):

    def test_units(self):
        self.assertEqual(parse_duration('900'), 900)
        self.assertEqual(parse_duration('45s'), 45)
        self.assertEqual(parse_duration('15m'), 900)
        self.assertEqual(parse_duration('12h'), 43200)
        self.assertEqual(parse_duration('30d'), 2592000)
        self.assertEqual(parse_duration(60), 60)

    def test_invalid(self):
        for value in ('', 'soon', '15w', '-5m', '0', 0):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_duration(value)


class TestTokenSettings(unittest.TestCase):

    @patch.dict(os.environ, {'ACCESS_TOKEN_SECRET': 'a', 'REFRESH_TOKEN_SECRET': 'r'}, clear=True)
    def test_defaults(self):
        settings = TokenSettings.from_env()

        self.assertEqual(settings.access_token_expiration, parse_duration(DEFAULT_ACCESS_TOKEN_EXPIRATION))
        self.assertEqual(settings.refresh_token_expiration, 30 * 86400)

    @patch.dict(os.environ, {'ACCESS_TOKEN_SECRET': 'a'}, clear=True)
    def test_missing_secret(self):
        with self.assertRaises(ValueError) as ctx:
            TokenSettings.from_env()
        self.assertIn('REFRESH_TOKEN_SECRET', str(ctx.exception))

    @patch.dict(os.environ, {'ACCESS_TOKEN_SECRET': 'same', 'REFRESH_TOKEN_SECRET': 'same'}, clear=True)
    def test_secrets_must_differ(self):
        with self.assertRaises(ValueError):
            TokenSettings.from_env()


class TestUserStoreBackend(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_default_is_mongodb(self):
        self.assertEqual(get_user_store_backend(), 'mongodb')

    @patch.dict(os.environ, {'USER_STORE': ' SQL '})
    def test_normalized(self):
        self.assertEqual(get_user_store_backend(), 'sql')

    @patch.dict(os.environ, {'USER_STORE': 'redis'})
    def test_unknown(self):
        with self.assertRaises(ValueError):
            get_user_store_backend()


if __name__ == '__main__':
    unittest.main()
