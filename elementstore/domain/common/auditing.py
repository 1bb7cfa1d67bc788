"""
Auditable record and the stamper that fills it.

Aggregates carry an ``AuditInfo`` as a plain attribute instead of inheriting
audit columns. Nothing stamps it implicitly: repositories ask the
``AuditStamper`` for a stamped copy when they insert, update or soft-delete an aggregate, and hand
it back to the aggregate only once the write has committed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from .value_object import ValueObject


@dataclass(frozen=True, eq=False)
class AuditInfo(ValueObject):
    """Creation, modification and soft-deletion metadata."""

    created_at: datetime | None = None
    creator_id: UUID | None = None
    last_modified_at: datetime | None = None
    last_modifier_id: UUID | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
    deleter_id: UUID | None = None

    def with_creation(self, at: datetime, by: UUID | None = None) -> AuditInfo:
        return replace(self, created_at=at, creator_id=by)

    def with_modification(self, at: datetime, by: UUID | None = None) -> AuditInfo:
        return replace(self, last_modified_at=at, last_modifier_id=by)

    def with_deletion(self, at: datetime, by: UUID | None = None) -> AuditInfo:
        return replace(self, is_deleted=True, deleted_at=at, deleter_id=by)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _anonymous() -> UUID | None:
    return None


class AuditStamper:
    """
    Produces stamped copies of audit records.

    Args:
        clock: Returns the current time (timezone-aware)
        current_actor: Returns the id of the acting user, or None
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        current_actor: Callable[[], UUID | None] = _anonymous,
    ) -> None:
        self.clock = clock
        self.current_actor = current_actor

    def created(self, audit: AuditInfo) -> AuditInfo:
        """Creation-stamped copy of audit; an existing creation stamp is kept."""
        if audit.created_at is not None:
            return audit
        return audit.with_creation(self.clock(), self.current_actor())

    def modified(self, audit: AuditInfo) -> AuditInfo:
        return audit.with_modification(self.clock(), self.current_actor())

    def deleted(self, audit: AuditInfo) -> AuditInfo:
        return audit.with_deletion(self.clock(), self.current_actor())
