"""Mapper for Element ORM ↔ Domain conversion."""

from datetime import UTC, datetime

from elementstore.domain.common.auditing import AuditInfo
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.domain.elements.value_objects.sub_element import SubElement
from elementstore.infrastructure.relational.models import Element as ElementORM
from elementstore.infrastructure.relational.models import SubElement as SubElementORM


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops the offset from timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ElementMapper:
    """Mapper for Element ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: ElementORM, include_details: bool = True) -> Element:
        """
        Convert ORM model to domain entity.

        Args:
            orm_model: Row to convert
            include_details: Map sub-elements too. The relationship must have
                been eagerly loaded when this is True.
        """
        sub_elements = (
            [SubElement(name=child.name, value=child.value) for child in orm_model.sub_elements]
            if include_details
            else []
        )
        return Element.create_with_id(
            id=ElementId(orm_model.id),
            name=orm_model.name,
            description=orm_model.description,
            sub_elements=sub_elements,
            audit=self._audit_to_domain(orm_model),
            details_loaded=include_details,
        )

    def to_orm(self, domain_entity: Element, orm_model: ElementORM | None = None) -> ElementORM:
        """
        Convert domain entity to ORM model.

        Sub-element rows are only rewritten for an entity whose details
        were loaded.
        """
        if orm_model is None:
            # Create new
            orm_model = ElementORM(id=domain_entity.id.value)

        orm_model.name = domain_entity.name
        orm_model.description = domain_entity.description
        self.audit_to_orm(domain_entity.audit, orm_model)

        if not domain_entity.details_loaded:
            # Children were never read, so the stored rows stay as they are
            return orm_model

        # Children are owned outright; replacing the list orphans the old rows
        orm_model.sub_elements = [
            SubElementORM(position=position, name=child.name, value=child.value)
            for position, child in enumerate(domain_entity.sub_elements)
        ]
        return orm_model

    def _audit_to_domain(self, orm_model: ElementORM) -> AuditInfo:
        return AuditInfo(
            created_at=_as_utc(orm_model.created_at),
            creator_id=orm_model.creator_id,
            last_modified_at=_as_utc(orm_model.last_modified_at),
            last_modifier_id=orm_model.last_modifier_id,
            is_deleted=orm_model.is_deleted,
            deleted_at=_as_utc(orm_model.deleted_at),
            deleter_id=orm_model.deleter_id,
        )

    def audit_to_orm(self, audit: AuditInfo, orm_model: ElementORM) -> None:
        """Copy audit metadata onto a row without touching its children."""
        # Creation stamps are written once
        if orm_model.created_at is None:
            orm_model.created_at = audit.created_at
            orm_model.creator_id = audit.creator_id
        orm_model.last_modified_at = audit.last_modified_at
        orm_model.last_modifier_id = audit.last_modifier_id
        orm_model.is_deleted = audit.is_deleted
        orm_model.deleted_at = audit.deleted_at
        orm_model.deleter_id = audit.deleter_id
