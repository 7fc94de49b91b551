"""
Account creation strategies.

The handler used for signups is picked from CREATION_HANDLERS by
Settings.creation_handler_name: "account" creates the login only,
"subscription" also creates a subscription with an admin user and binds the
account to it.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session

from app.core.context import AuthenticationContext
from app.core.errors import FormValidationError
from app.core.messages import translate
from app.core.security import hash_password
from app.managers.account import AccountManager
from app.managers.subscription import SubscriptionManager
from app.managers.user import UserManager
from app.models.account import Account
from app.models.user import ROLE_ADMIN
from app.services.events import ACCOUNT_CREATED, EventPublisher
from app.services.forms import AccountForm, submit_form

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class AccountCreationHandler:
    """Validate signup data and persist a new account."""

    def __init__(
        self,
        accounts: AccountManager,
        subscriptions: SubscriptionManager,
        users: UserManager,
        events: EventPublisher,
    ) -> None:
        self.accounts = accounts
        self.subscriptions = subscriptions
        self.users = users
        self.events = events

    def create(self, data: Mapping[str, Any] | None) -> Account:
        """Create and commit an account from submitted data; raises FormValidationError."""
        form = submit_form(AccountForm, data)
        if self.accounts.get_account_by_email(form.email) is not None:
            raise FormValidationError({"email": [translate("error.account.emailAlreadyUsed")]})

        account = self.accounts.create()
        account.email = form.email
        account.password_hash = hash_password(form.plain_password)
        self.accounts.update(account, flush=False)
        self.setup(account, form)
        self.events.publish(ACCOUNT_CREATED, {"email": account.email})
        self.accounts.flush()

        logger.info("Account created", extra={"account_id": account.id})
        return account

    def setup(self, account: Account, form: AccountForm) -> None:
        """Hook for strategies that create more than the account itself."""


class SubscriptionAccountCreationHandler(AccountCreationHandler):
    """Also create the account's first subscription and its admin user."""

    def setup(self, account: Account, form: AccountForm) -> None:
        subscription = self.subscriptions.create(form.subscription_name or form.email)
        self.subscriptions.update(subscription, flush=False)

        username = form.username or form.email.split("@", 1)[0]
        user = self.users.create(subscription, account, username=username, role=ROLE_ADMIN)
        user.password_hash = account.password_hash
        self.users.update(user, flush=False)

        account.subscription = subscription
        account.current_user = user


CREATION_HANDLERS: dict[str, type[AccountCreationHandler]] = {
    "account": AccountCreationHandler,
    "subscription": SubscriptionAccountCreationHandler,
}


def build_creation_handler(
    settings: "Settings",
    session: Session,
    auth: AuthenticationContext,
    events: EventPublisher,
) -> AccountCreationHandler:
    """Instantiate the configured creation strategy with managers bound to session."""
    handler_cls = CREATION_HANDLERS[settings.creation_handler_name]
    return handler_cls(
        AccountManager(session, auth),
        SubscriptionManager(session, auth),
        UserManager(session, auth),
        events,
    )
