"""Exceptions raised by account workflows and mapped to HTTP responses by the API layer."""

from app.core.messages import translate


class AccountServiceError(Exception):
    """Base error for account workflows; carries a user-facing message and an HTTP status."""

    status_code = 400
    message_key = ""

    def __init__(self, message: str | None = None, **params: object) -> None:
        self.message = message or translate(self.message_key, **params)
        super().__init__(self.message)


class AccountNotFoundError(AccountServiceError):
    """No account matches the given email."""

    status_code = 404
    message_key = "error.accountPasswordDelete.accountNotFound"


class ResetTooSoonError(AccountServiceError):
    """A password reset was requested inside the cooldown window."""

    status_code = 400
    message_key = "error.accountPasswordDelete.notEnoughTimeAgo"


class MissingTokenError(AccountServiceError):
    """A password confirmation was submitted without a token."""

    status_code = 400
    message_key = "error.accountPasswordPost.noConfirmationToken"


class InvalidTokenError(AccountServiceError):
    """No account holds the submitted confirmation token."""

    status_code = 404
    message_key = "error.accountPasswordPost.noValidConfirmationToken"


class UserNotFoundError(AccountServiceError):
    """The user does not exist or is not visible to the current user."""

    status_code = 404
    message_key = "error.accountUsersGet.userNotFound"


class UnauthenticatedError(AccountServiceError):
    """The request carries no resolvable account."""

    status_code = 401
    message_key = "error.account.notAuthenticated"


class InvalidCredentialsError(AccountServiceError):
    """Email and password do not match an account."""

    status_code = 401
    message_key = "error.accountToken.invalidCredentials"


class InvalidBindingError(AccountServiceError):
    """The subscription has no user reachable from the current account."""

    status_code = 400
    message_key = "error.accountSubscriptionPut.invalidSubscription"


class StorageError(AccountServiceError):
    """Persisting staged changes failed; the session has been rolled back."""

    status_code = 500
    message_key = "error.storage.failure"


class FormValidationError(AccountServiceError):
    """Submitted data failed validation; errors maps field names to messages."""

    status_code = 400

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        super().__init__("Validation Failed")
