"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateEmailError, StoreUnavailableError
from domain.model.user import User


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── create + get (round-trip) ─────────────────────────────

    def test_create_and_get_by_id(self):
        user = self.repo.create(email='a@x.com', password_hash='hash')

        self.assertIsInstance(user, User)
        self.assertEqual(self.repo.get_by_id(user.id), user)
        self.assertIsNone(user.hashed_refresh_token)
        self.assertFalse(user.is_logged_in)

    def test_get_by_email(self):
        user = self.repo.create(email='a@x.com', password_hash='hash')

        self.assertEqual(self.repo.get_by_email('a@x.com'), user)

    def test_email_lookup_is_case_sensitive(self):
        self.repo.create(email='a@x.com', password_hash='hash')

        self.assertIsNone(self.repo.get_by_email('A@x.com'))

    def test_missing_lookups_return_none(self):
        self.assertIsNone(self.repo.get_by_id('nonexistent'))
        self.assertIsNone(self.repo.get_by_email('nobody@x.com'))

    def test_create_duplicate_email_raises(self):
        self.repo.create(email='a@x.com', password_hash='hash')

        with self.assertRaises(DuplicateEmailError):
            self.repo.create(email='a@x.com', password_hash='other')

    def test_fail_next_create_returns_none_once(self):
        self.repo.fail_next_create = True

        self.assertIsNone(self.repo.create(email='a@x.com', password_hash='hash'))
        self.assertIsNotNone(self.repo.create(email='a@x.com', password_hash='hash'))

    # ── update_refresh_token_hash ─────────────────────────────

    def test_set_and_clear_refresh_token_hash(self):
        user = self.repo.create(email='a@x.com', password_hash='hash')

        self.assertTrue(self.repo.update_refresh_token_hash(user.id, 'rt-hash'))
        self.assertEqual(self.repo.get_by_id(user.id).hashed_refresh_token, 'rt-hash')
        self.assertTrue(self.repo.get_by_id(user.id).is_logged_in)

        self.assertTrue(self.repo.update_refresh_token_hash(user.id, None))
        self.assertIsNone(self.repo.get_by_id(user.id).hashed_refresh_token)

    def test_update_missing_user_returns_false(self):
        self.assertFalse(self.repo.update_refresh_token_hash('nonexistent', 'rt-hash'))

    def test_ping(self):
        self.assertTrue(self.repo.ping())

    def test_unavailable_store_raises(self):
        user = self.repo.create(email='a@x.com', password_hash='hash')
        self.repo.unavailable = True

        with self.assertRaises(StoreUnavailableError):
            self.repo.get_by_email('a@x.com')
        with self.assertRaises(StoreUnavailableError):
            self.repo.get_by_id(user.id)
        with self.assertRaises(StoreUnavailableError):
            self.repo.update_refresh_token_hash(user.id, None)
        self.assertFalse(self.repo.ping())


if __name__ == '__main__':
    unittest.main()
