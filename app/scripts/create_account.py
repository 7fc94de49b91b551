"""
Create an account (e.g. for support or seeding). Run from project root:
  python -m app.scripts.create_account EMAIL PASSWORD [--subscription NAME] [--username NAME]
Example:
  python -m app.scripts.create_account admin@example.com your-secure-password --subscription Acme
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.context import AuthenticationContext
from app.core.database import SessionLocal
from app.core.errors import AccountServiceError, FormValidationError
from app.services.account_creation import build_creation_handler
from app.services.events import OutboxEventPublisher


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an account (same rules as POST /account).")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("--subscription", dest="subscription_name", default=None)
    parser.add_argument("--username", default=None)
    args = parser.parse_args()

    data = {"email": args.email.strip(), "plainPassword": args.password}
    if args.subscription_name:
        data["subscriptionName"] = args.subscription_name
    if args.username:
        data["username"] = args.username

    db = SessionLocal()
    try:
        handler = build_creation_handler(
            get_settings(),
            db,
            AuthenticationContext.anonymous(),
            OutboxEventPublisher(db),
        )
        try:
            account = handler.create(data)
        except FormValidationError as e:
            for field, messages in e.errors.items():
                print(f"{field}: {'; '.join(messages)}", file=sys.stderr)
            return 1
        except AccountServiceError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created account '{account.email}' (id {account.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
