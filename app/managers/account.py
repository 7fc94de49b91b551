"""Account lookups and creation."""

from app.managers.base import BaseEntityManager
from app.models.account import Account


class AccountManager(BaseEntityManager[Account]):
    model = Account

    def create(self) -> Account:
        """Return a new, unsaved account with no id and no confirmation token."""
        return Account()

    def get_account_by_email(self, email: str | None, for_update: bool = False) -> Account | None:
        """
        Exact match on email; an empty email never matches.

        for_update=True locks the row until the session commits or rolls back
        and refreshes an already loaded instance, so a read-check-write
        sequence sees the latest committed state.
        """
        if not email or not isinstance(email, str):
            return None
        query = self.query().filter(Account.email == email)
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    def get_by_confirmation_token(self, token: str | None) -> Account | None:
        """Exact match on the confirmation token; an empty token never matches."""
        if not token or not isinstance(token, str):
            return None
        return self.query().filter(Account.confirmation_token == token).first()

    def get_by_id(self, account_id: int) -> Account | None:
        return self.query().filter(Account.id == account_id).first()
