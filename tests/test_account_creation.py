"""Tests for app.services.account_creation: plain and subscription signup strategies."""

import unittest
from unittest.mock import MagicMock

from app.core.context import AuthenticationContext
from app.core.errors import FormValidationError
from app.core.messages import translate
from app.models import Account, DomainEvent, Subscription, User
from app.models.user import ROLE_ADMIN
from app.services.account_creation import (
    AccountCreationHandler,
    SubscriptionAccountCreationHandler,
    build_creation_handler,
)
from app.services.events import ACCOUNT_CREATED, OutboxEventPublisher
from tests.support import PASSWORD, add_account, make_session_factory


def _handler(session, name: str) -> AccountCreationHandler:
    settings = MagicMock()
    settings.creation_handler_name = name
    return build_creation_handler(
        settings,
        session,
        AuthenticationContext.anonymous(),
        OutboxEventPublisher(session),
    )


class CreationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.addCleanup(self.session.close)


class TestBuildCreationHandler(CreationTestCase):
    def test_strategy_selected_by_name(self) -> None:
        self.assertIs(type(_handler(self.session, "account")), AccountCreationHandler)
        self.assertIs(type(_handler(self.session, "subscription")), SubscriptionAccountCreationHandler)

    def test_unknown_strategy(self) -> None:
        with self.assertRaises(KeyError):
            _handler(self.session, "ldap")


class TestAccountCreation(CreationTestCase):
    """The plain strategy creates the login only."""

    def test_creates_account_and_stages_event(self) -> None:
        account = _handler(self.session, "account").create(
            {"email": "jane@example.com", "plainPassword": PASSWORD}
        )
        self.assertIsNotNone(account.id)
        self.assertTrue(account.check_password(PASSWORD))
        self.assertIsNone(account.confirmation_token)
        self.assertIsNone(account.current_user)
        self.assertEqual(self.session.query(Subscription).count(), 0)

        events = self.session.query(DomainEvent).filter(DomainEvent.name == ACCOUNT_CREATED).all()
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].payload, {"email": "jane@example.com"})

    def test_duplicate_email(self) -> None:
        add_account(self.session)
        with self.assertRaises(FormValidationError) as ctx:
            _handler(self.session, "account").create({"email": "jane@example.com", "plainPassword": PASSWORD})
        self.assertEqual(ctx.exception.errors, {"email": [translate("error.account.emailAlreadyUsed")]})
        self.assertEqual(self.session.query(Account).count(), 1)

    def test_invalid_data_creates_nothing(self) -> None:
        with self.assertRaises(FormValidationError):
            _handler(self.session, "account").create({"email": "jane@example.com", "plainPassword": "short"})
        self.assertEqual(self.session.query(Account).count(), 0)
        self.assertEqual(self.session.query(DomainEvent).count(), 0)


class TestSubscriptionAccountCreation(CreationTestCase):
    """The subscription strategy also creates a subscription with an admin user bound to the account."""

    def test_creates_subscription_and_admin_user(self) -> None:
        account = _handler(self.session, "subscription").create(
            {"email": "jane@example.com", "plainPassword": PASSWORD, "subscriptionName": "Acme"}
        )
        user = account.current_user
        self.assertIsNotNone(user)
        self.assertEqual(user.role, ROLE_ADMIN)
        self.assertEqual(user.username, "jane")
        self.assertEqual(user.account_id, account.id)
        self.assertEqual(user.password_hash, account.password_hash)
        self.assertIsNotNone(user.created_at)
        self.assertEqual(user.subscription.name, "Acme")
        self.assertEqual(account.subscription_id, user.subscription_id)
        self.assertEqual(self.session.query(User).count(), 1)

    def test_defaults_for_names(self) -> None:
        account = _handler(self.session, "subscription").create(
            {"email": "jane@example.com", "plainPassword": PASSWORD, "username": "jdoe"}
        )
        self.assertEqual(account.subscription.name, "jane@example.com")
        self.assertEqual(account.current_user.username, "jdoe")

    def test_failed_validation_creates_no_subscription(self) -> None:
        with self.assertRaises(FormValidationError):
            _handler(self.session, "subscription").create({"email": "nope", "plainPassword": PASSWORD})
        self.assertEqual(self.session.query(Subscription).count(), 0)


if __name__ == "__main__":
    unittest.main()
