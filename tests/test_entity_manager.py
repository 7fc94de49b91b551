"""Unit tests for app.managers.base: audit stamping and commit handling (mocked session)."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import SQLAlchemyError

from app.core.context import AuthenticationContext
from app.core.errors import StorageError
from app.managers.account import AccountManager
from app.managers.user import UserManager
from app.models import Account, User


def _context_acting_as(user: User | None) -> AuthenticationContext:
    return AuthenticationContext.for_account(Account(email="actor@example.com", current_user=user))


class TestAuditStamping(unittest.TestCase):
    """created_at and created_by are written on first save only."""

    def setUp(self) -> None:
        self.creator = User(id=1, username="creator")
        self.session = MagicMock()

    def test_first_save_stamps_creation_metadata(self) -> None:
        manager = UserManager(self.session, _context_acting_as(self.creator))
        entity = User(username="new")
        manager.update(entity)
        self.assertIsNotNone(entity.created_at)
        self.assertIs(entity.created_by, self.creator)
        self.session.add.assert_called_once_with(entity)
        self.session.commit.assert_called_once()

    def test_later_saves_keep_original_stamps(self) -> None:
        entity = User(username="new")
        UserManager(self.session, _context_acting_as(self.creator)).update(entity)
        created_at = entity.created_at

        other = User(id=2, username="other")
        UserManager(self.session, _context_acting_as(other)).update(entity)
        self.assertEqual(entity.created_at, created_at)
        self.assertIs(entity.created_by, self.creator)

    def test_anonymous_save_leaves_creator_empty(self) -> None:
        manager = UserManager(self.session, AuthenticationContext.anonymous())
        entity = User(username="new")
        manager.update(entity)
        self.assertIsNotNone(entity.created_at)
        self.assertIsNone(entity.created_by)

    def test_unaudited_entity_is_only_staged(self) -> None:
        manager = AccountManager(self.session, _context_acting_as(self.creator))
        account = Account(email="jane@example.com")
        manager.update(account)
        self.assertFalse(hasattr(account, "created_by"))
        self.session.add.assert_called_once_with(account)


class TestCommitHandling(unittest.TestCase):
    """flush=False stages only; commit failures roll back and raise StorageError."""

    def setUp(self) -> None:
        self.session = MagicMock()
        self.manager = UserManager(self.session, AuthenticationContext.anonymous())

    def test_update_without_flush_does_not_commit(self) -> None:
        entity = User(username="new")
        self.manager.update(entity, flush=False)
        self.session.add.assert_called_once_with(entity)
        self.session.commit.assert_not_called()

    def test_remove_deletes_and_commits(self) -> None:
        entity = User(username="old")
        self.manager.remove(entity)
        self.session.delete.assert_called_once_with(entity)
        self.session.commit.assert_called_once()

    def test_remove_without_flush_does_not_commit(self) -> None:
        self.manager.remove(User(username="old"), flush=False)
        self.session.commit.assert_not_called()

    def test_commit_failure_rolls_back(self) -> None:
        self.session.commit.side_effect = SQLAlchemyError("connection lost")
        with self.assertLogs("app.managers.base", level="ERROR"):
            with self.assertRaises(StorageError) as ctx:
                self.manager.update(User(username="new"))
        self.session.rollback.assert_called_once()
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIsInstance(ctx.exception.__cause__, SQLAlchemyError)


if __name__ == "__main__":
    unittest.main()
