"""
Ownership model shared by API resources.

AuditStampMixin holds the write-once creation metadata (created_at, created_by).
ApiResource embeds it, scopes the row to a subscription, and carries the
per-viewer capability flags. Capability checks and the API path are not
inherited: every mapped ApiResource must implement the OwnershipPolicy methods
itself.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import Column, DateTime, ForeignKey, Integer, inspect
from sqlalchemy.orm import declared_attr, relationship

from app.core.config import get_settings

if TYPE_CHECKING:
    from app.models.user import User

POLICY_METHODS = (
    "check_user_can_create",
    "check_user_can_edit",
    "check_user_can_see",
    "check_user_can_delete",
    "api_path",
)

# Columns cleared when a resource is cloned.
IDENTITY_COLUMNS = frozenset({"id", "created_at", "created_by_id"})


@runtime_checkable
class OwnershipPolicy(Protocol):
    """Capability checks a resource answers for a given viewing user, and where it lives in the API."""

    def check_user_can_create(self, user: "User") -> bool: ...

    def check_user_can_edit(self, user: "User") -> bool: ...

    def check_user_can_see(self, user: "User") -> bool: ...

    def check_user_can_delete(self, user: "User") -> bool: ...

    def api_path(self) -> str: ...


@dataclass(frozen=True)
class Capabilities:
    """Capability flags computed for one viewer during one request."""

    can_edit: bool
    can_delete: bool
    can_see: bool


class CapabilitiesNotComputedError(RuntimeError):
    """Raised when capability flags are read before compute_capabilities()."""


class AuditStampMixin:
    """Creation timestamp and creator, set once on first persistence."""

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), nullable=True)

    @declared_attr
    def created_by_id(cls):
        return Column(
            Integer,
            ForeignKey("users.id", ondelete="SET NULL", use_alter=True, name=f"fk_{cls.__tablename__}_created_by"),
            nullable=True,
        )

    @declared_attr
    def created_by(cls):
        # users stamp their own creator, which makes the relationship self-referential
        remote_side = "User.id" if cls.__name__ == "User" else None
        return relationship(
            "User",
            foreign_keys=f"{cls.__name__}.created_by_id",
            remote_side=remote_side,
            post_update=True,
        )


class ApiResource(AuditStampMixin):
    """Subscription-scoped resource exposed over the API."""

    id = Column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def subscription_id(cls):
        return Column(Integer, ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=True, index=True)

    @declared_attr
    def subscription(cls):
        return relationship("Subscription", foreign_keys=f"{cls.__name__}.subscription_id")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        if "__tablename__" in cls.__dict__:
            missing = [name for name in POLICY_METHODS if not callable(getattr(cls, name, None))]
            if missing:
                raise TypeError(
                    f"{cls.__name__} must define its own capability checks and api_path: {', '.join(missing)}"
                )
        super().__init_subclass__(**kwargs)

    def compute_capabilities(self, viewer: "User") -> Capabilities:
        """Evaluate edit/delete/see for viewer and keep the result on this instance."""
        capabilities = Capabilities(
            can_edit=bool(self.check_user_can_edit(viewer)),
            can_delete=bool(self.check_user_can_delete(viewer)),
            can_see=bool(self.check_user_can_see(viewer)),
        )
        self._capabilities = capabilities
        return capabilities

    @property
    def capabilities(self) -> Capabilities:
        capabilities = getattr(self, "_capabilities", None)
        if capabilities is None:
            raise CapabilitiesNotComputedError(
                f"Capabilities of {type(self).__name__} {self.id} were not computed for the current viewer"
            )
        return capabilities

    @property
    def user_can_edit(self) -> bool:
        return self.capabilities.can_edit

    @property
    def user_can_delete(self) -> bool:
        return self.capabilities.can_delete

    @property
    def user_can_see(self) -> bool:
        return self.capabilities.can_see

    @property
    def self_link(self) -> str | None:
        """Absolute API path of this resource; None until it has an id."""
        if self.id is None:
            return None
        return f"{get_settings().API_V1_PREFIX}{self.api_path()}"

    def clone(self):
        """Return a transient copy without id, created_at, or created_by."""
        mapper = inspect(type(self))
        state = inspect(self)
        copy = type(self)()
        for attr in mapper.column_attrs:
            if attr.key in IDENTITY_COLUMNS:
                continue
            setattr(copy, attr.key, getattr(self, attr.key))
        for rel in mapper.relationships:
            if rel.key == "created_by" or rel.uselist or rel.key in state.unloaded:
                continue
            setattr(copy, rel.key, getattr(self, rel.key))
        return copy

    __copy__ = clone
