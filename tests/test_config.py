"""Unit tests for app.core.config.Settings validation and derived values."""

import unittest

from pydantic import ValidationError

from app.core.config import DEFAULT_PASSWORD_RESET_TIME, Settings


class TestSettings(unittest.TestCase):
    def test_password_reset_time_default(self) -> None:
        self.assertEqual(Settings.model_fields["PASSWORD_RESET_TIME"].default, DEFAULT_PASSWORD_RESET_TIME)
        self.assertEqual(DEFAULT_PASSWORD_RESET_TIME, 216000)

    def test_negative_password_reset_time_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(PASSWORD_RESET_TIME=-1)

    def test_zero_password_reset_time_allowed(self) -> None:
        self.assertEqual(Settings(PASSWORD_RESET_TIME=0).PASSWORD_RESET_TIME, 0)

    def test_non_postgres_database_url_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://localhost/accounts")

    def test_outbox_batch_size_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(OUTBOX_BATCH_SIZE=0)

    def test_outbox_max_attempts_bounds(self) -> None:
        self.assertEqual(Settings.model_fields["OUTBOX_MAX_ATTEMPTS"].default, 5)
        with self.assertRaises(ValidationError):
            Settings(OUTBOX_MAX_ATTEMPTS=0)

    def test_creation_handler_follows_saas_flag(self) -> None:
        self.assertEqual(
            Settings(SOFTWARE_AS_A_SERVICE=True, ACCOUNT_CREATION_HANDLER=None).creation_handler_name,
            "subscription",
        )
        self.assertEqual(
            Settings(SOFTWARE_AS_A_SERVICE=False, ACCOUNT_CREATION_HANDLER=None).creation_handler_name,
            "account",
        )

    def test_explicit_creation_handler_wins(self) -> None:
        settings = Settings(SOFTWARE_AS_A_SERVICE=True, ACCOUNT_CREATION_HANDLER="account")
        self.assertEqual(settings.creation_handler_name, "account")

    def test_unknown_creation_handler_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(ACCOUNT_CREATION_HANDLER="ldap")


if __name__ == "__main__":
    unittest.main()
