"""Tests for AuditInfo and AuditStamper."""

from datetime import UTC, datetime
from uuid import uuid4

from elementstore.domain.common.auditing import AuditInfo, AuditStamper

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
T1 = datetime(2024, 1, 2, 12, 0, tzinfo=UTC)


class _Clock:
    def __init__(self, *times: datetime) -> None:
        self._times = list(times)

    def __call__(self) -> datetime:
        return self._times.pop(0)


class TestAuditInfo:
    """Test suite for AuditInfo."""

    def test_defaults(self) -> None:
        audit = AuditInfo()
        assert audit.created_at is None
        assert audit.is_deleted is False

    def test_with_creation_returns_new_instance(self) -> None:
        actor = uuid4()
        audit = AuditInfo()
        stamped = audit.with_creation(T0, actor)
        assert stamped.created_at == T0
        assert stamped.creator_id == actor
        assert audit.created_at is None

    def test_with_deletion(self) -> None:
        audit = AuditInfo().with_deletion(T1)
        assert audit.is_deleted is True
        assert audit.deleted_at == T1
        assert audit.deleter_id is None


class TestAuditStamper:
    """Test suite for AuditStamper."""

    def test_created(self) -> None:
        actor = uuid4()
        audit = AuditStamper(clock=lambda: T0, current_actor=lambda: actor).created(AuditInfo())
        assert audit.created_at == T0
        assert audit.creator_id == actor

    def test_created_keeps_existing_stamp(self) -> None:
        audit = AuditStamper(clock=lambda: T1).created(AuditInfo(created_at=T0))
        assert audit.created_at == T0

    def test_modified(self) -> None:
        audit = AuditStamper(clock=_Clock(T1)).modified(AuditInfo(created_at=T0))
        assert audit.created_at == T0
        assert audit.last_modified_at == T1

    def test_deleted(self) -> None:
        audit = AuditStamper(clock=lambda: T1).deleted(AuditInfo())
        assert audit.is_deleted is True
        assert audit.deleted_at == T1

    def test_stamping_leaves_original_untouched(self) -> None:
        original = AuditInfo()
        stamper = AuditStamper(clock=lambda: T0)

        stamper.created(original)
        stamper.modified(original)
        stamper.deleted(original)

        assert original == AuditInfo()

    def test_default_clock_is_timezone_aware(self) -> None:
        audit = AuditStamper().created(AuditInfo())
        assert audit.created_at is not None
        assert audit.created_at.tzinfo is not None
