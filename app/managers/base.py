"""Base manager: stage, stamp, and commit entities through a SQLAlchemy session."""

import logging
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.core.context import AuthenticationContext
from app.core.errors import StorageError
from app.models.resource import AuditStampMixin

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseEntityManager(Generic[ModelT]):
    """
    Generic create/update/remove for one model class.

    update() stamps created_at and created_by on audited entities the first
    time they are saved; later calls never overwrite them. With flush=False the
    entity is only staged so several changes can be committed together via
    flush().
    """

    model: type[ModelT]

    def __init__(self, session: Session, auth: AuthenticationContext) -> None:
        self.session = session
        self.auth = auth

    def query(self) -> Query:
        return self.session.query(self.model)

    def update(self, entity: Any, flush: bool = True) -> None:
        """Stamp audit metadata on first save, stage the entity, and commit when flush is True."""
        if isinstance(entity, AuditStampMixin):
            if entity.created_at is None:
                entity.created_at = datetime.now(UTC)
            if entity.created_by is None:
                user = self.auth.current_user()
                if user is not None:
                    entity.created_by = user

        self.session.add(entity)
        if flush:
            self.flush()

    def remove(self, entity: Any, flush: bool = True) -> None:
        """Stage deletion of the entity and commit when flush is True."""
        self.session.delete(entity)
        if flush:
            self.flush()

    def flush(self) -> None:
        """Commit everything staged in the session; storage failures roll back and raise StorageError."""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(
                "Committing staged changes failed",
                extra={"model": self.model.__name__},
            )
            raise StorageError() from e
