"""Unit tests for app.core.context: account -> user -> subscription resolution."""

import unittest

from app.core.context import AuthenticationContext, SecurityToken
from app.models import Account, Subscription, User


class TestAuthenticationContext(unittest.TestCase):
    """Each lookup yields None as soon as a link in the chain is missing."""

    def test_no_token(self) -> None:
        auth = AuthenticationContext.anonymous()
        self.assertIsNone(auth.token)
        self.assertIsNone(auth.current_account())
        self.assertIsNone(auth.current_user())
        self.assertIsNone(auth.current_subscription())

    def test_principal_that_is_not_an_account(self) -> None:
        auth = AuthenticationContext(SecurityToken(principal="anon."))
        self.assertIsNone(auth.current_account())
        self.assertIsNone(auth.current_user())
        self.assertIsNone(auth.current_subscription())

    def test_account_without_current_user(self) -> None:
        account = Account(email="jane@example.com")
        auth = AuthenticationContext.for_account(account, credentials="jwt")
        self.assertIs(auth.current_account(), account)
        self.assertEqual(auth.token.credentials, "jwt")
        self.assertIsNone(auth.current_user())
        self.assertIsNone(auth.current_subscription())

    def test_user_without_subscription(self) -> None:
        user = User(username="jane")
        account = Account(email="jane@example.com", current_user=user)
        auth = AuthenticationContext.for_account(account)
        self.assertIs(auth.current_user(), user)
        self.assertIsNone(auth.current_subscription())

    def test_full_chain(self) -> None:
        subscription = Subscription(name="Acme")
        user = User(username="jane", subscription=subscription)
        account = Account(email="jane@example.com", current_user=user)
        auth = AuthenticationContext.for_account(account)
        self.assertIs(auth.current_account(), account)
        self.assertIs(auth.current_user(), user)
        self.assertIs(auth.current_subscription(), subscription)


if __name__ == "__main__":
    unittest.main()
