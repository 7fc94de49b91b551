"""Shared fixtures: an in-memory SQLite schema and seeded accounts, subscriptions and users."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import security
from app.core.security import hash_password
from app.models import Account, Base, Subscription, User
from app.models.user import ROLE_ADMIN

# Cheap hashes; the cost factor is irrelevant to behaviour under test.
security.BCRYPT_ROUNDS = 4

PASSWORD = "correct-horse"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the full schema; one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def add_account(session: Session, email: str = "jane@example.com", password: str = PASSWORD, **fields) -> Account:
    account = Account(email=email, password_hash=hash_password(password), **fields)
    session.add(account)
    session.commit()
    return account


def add_membership(
    session: Session,
    account: Account,
    subscription_name: str = "Acme",
    role: str = ROLE_ADMIN,
    bind: bool = False,
) -> tuple[Subscription, User]:
    """Create a subscription with a user owned by account; bind=True makes it the current user."""
    subscription = Subscription(name=subscription_name)
    user = User(
        subscription=subscription,
        account=account,
        username=f"{account.email.split('@')[0]}-{subscription_name.lower()}",
        email=account.email,
        role=role,
    )
    session.add_all([subscription, user])
    if bind:
        account.subscription = subscription
        account.current_user = user
    session.commit()
    return subscription, user
