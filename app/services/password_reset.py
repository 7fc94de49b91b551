"""
Password reset: issue a confirmation token (at most once per cooldown window)
and consume it to set a new password.

An account is in ResetState.RESET_PENDING while it holds a confirmation
token. A new request is accepted when no reset is pending or the pending one
was requested at least PASSWORD_RESET_TIME seconds ago; it then replaces
the token. Consuming the token clears it together with its request time.
"""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from app.core.config import DEFAULT_PASSWORD_RESET_TIME
from app.core.errors import (
    AccountNotFoundError,
    InvalidTokenError,
    MissingTokenError,
    ResetTooSoonError,
)
from app.core.security import generate_confirmation_token
from app.managers.account import AccountManager
from app.models.account import Account, ResetState
from app.services.events import ACCOUNT_PASSWORD_RESET, ACCOUNT_PASSWORD_UPDATED, EventPublisher
from app.services.forms import PasswordResetForm, submit_form

logger = logging.getLogger(__name__)


class PasswordResetService:
    def __init__(
        self,
        accounts: AccountManager,
        events: EventPublisher,
        reset_time: int = DEFAULT_PASSWORD_RESET_TIME,
        token_generator: Callable[[], str] = generate_confirmation_token,
    ) -> None:
        self._accounts = accounts
        self._events = events
        self._reset_time = timedelta(seconds=reset_time)
        self._generate_token = token_generator

    def can_request(self, account: Account, now: datetime) -> bool:
        """True when a reset request for account would be accepted at now."""
        if account.reset_state is ResetState.NO_RESET_PENDING:
            return True
        return account.reset_requested_by(now - self._reset_time)

    def request_reset(self, email: str | None, now: datetime | None = None) -> Account:
        """
        Issue a new confirmation token for the account registered with email.

        Raises AccountNotFoundError for an unknown email and ResetTooSoonError
        inside the cooldown window; neither mutates the account.
        """
        # Row lock held until commit; a concurrent request for the account waits here.
        account = self._accounts.get_account_by_email(email, for_update=True)
        if account is None:
            raise AccountNotFoundError()

        now = now or datetime.now(UTC)
        if not self.can_request(account, now):
            logger.warning(
                "Password reset requested inside the cooldown window",
                extra={"account_id": account.id},
            )
            raise ResetTooSoonError()

        account.issue_confirmation_token(self._generate_token(), now)
        self._accounts.update(account, flush=False)
        self._events.publish(
            ACCOUNT_PASSWORD_RESET,
            {
                "account_id": account.id,
                "email": account.email,
                "confirmation_token": account.confirmation_token,
            },
        )
        self._accounts.flush()
        logger.info("Password reset token issued", extra={"account_id": account.id})
        return account

    def confirm_reset(self, token: str | None, data: Mapping[str, Any] | None) -> Account:
        """
        Set the password submitted in data on the account holding token.

        Raises MissingTokenError (no lookup performed), InvalidTokenError, or
        FormValidationError; on validation failure the token stays usable.
        """
        if not token or not isinstance(token, str):
            raise MissingTokenError()

        account = self._accounts.get_by_confirmation_token(token)
        if account is None:
            raise InvalidTokenError()

        form = submit_form(PasswordResetForm, data)

        account.apply_new_password(form.plain_password)
        self._accounts.update(account, flush=False)
        self._events.publish(
            ACCOUNT_PASSWORD_UPDATED,
            {"account_id": account.id, "email": account.email},
        )
        self._accounts.flush()
        logger.info("Password reset token consumed", extra={"account_id": account.id})
        return account
