"""User-facing message catalogue keyed by translation key."""

MESSAGES: dict[str, str] = {
    "error.accountPasswordDelete.accountNotFound": "No account was found for this email address.",
    "error.accountPasswordDelete.notEnoughTimeAgo": (
        "A password reset was already requested recently. Please check your inbox or try again later."
    ),
    "error.accountPasswordPost.noConfirmationToken": "A confirmation token is required.",
    "error.accountPasswordPost.noValidConfirmationToken": "The confirmation token is not valid.",
    "error.accountSubscriptionPut.invalidSubscription": (
        "The subscription {subscription_id} is not available for this account."
    ),
    "error.accountToken.invalidCredentials": "Invalid email or password.",
    "error.accountUsersGet.userNotFound": "No such user in the current subscription.",
    "error.account.notAuthenticated": "Not authenticated.",
    "error.account.emailAlreadyUsed": "This email address is already in use.",
    "error.storage.failure": "The request could not be stored. Please try again later.",
}


def translate(key: str, **params: object) -> str:
    """Return the message for key with params substituted; unknown keys are returned as-is."""
    template = MESSAGES.get(key)
    if template is None:
        return key
    return template.format(**params) if params else template
