"""Unit tests for app.core.security: hashing, confirmation tokens, JWTs."""

import unittest

import jwt

from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_confirmation_token,
    hash_password,
    verify_password,
)
from app.models import Account
from tests.support import PASSWORD


class TestPasswords(unittest.TestCase):
    def test_hash_and_verify(self) -> None:
        hashed = hash_password(PASSWORD)
        self.assertNotEqual(hashed, PASSWORD)
        self.assertTrue(verify_password(PASSWORD, hashed))
        self.assertFalse(verify_password("wrong-horse", hashed))

    def test_missing_or_malformed_hash(self) -> None:
        self.assertFalse(verify_password(PASSWORD, None))
        self.assertFalse(verify_password(PASSWORD, "not-a-bcrypt-hash"))


class TestConfirmationTokens(unittest.TestCase):
    def test_tokens_are_url_safe_and_distinct(self) -> None:
        tokens = {generate_confirmation_token() for _ in range(50)}
        self.assertEqual(len(tokens), 50)
        for token in tokens:
            self.assertGreaterEqual(len(token), 43)
            self.assertRegex(token, r"^[A-Za-z0-9_-]+$")


class TestAccessTokens(unittest.TestCase):
    def test_token_identifies_account(self) -> None:
        token = create_access_token(Account(id=42, email="jane@example.com"))
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "42")
        self.assertEqual(payload["email"], "jane@example.com")
        self.assertIn("exp", payload)

    def test_token_signed_with_other_secret_rejected(self) -> None:
        token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm="HS256")
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
