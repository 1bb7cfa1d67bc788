"""Mapper for Element document ↔ Domain conversion."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from elementstore.domain.common.auditing import AuditInfo
from elementstore.domain.common.value_objects import ElementId
from elementstore.domain.elements.entities.element import Element
from elementstore.domain.elements.value_objects.sub_element import SubElement


def _as_utc(value: datetime | None) -> datetime | None:
    # BSON dates come back naive unless the client is tz_aware
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _str_to_uuid(value: str | None) -> UUID | None:
    return UUID(value) if value else None


class ElementDocumentMapper:
    """
    Maps an Element and its sub-elements onto a single document.

    Layout:
        {
            "_id": "<uuid>",
            "name": ..., "description": ...,
            "sub_elements": [{"name": ..., "value": ...}, ...],
            "created_at": ..., "creator_id": ..., ...,
            "is_deleted": false, "deleted_at": null, "deleter_id": null
        }

    A document read with the sub_elements field projected away maps to an
    element whose details are not loaded.
    """

    def to_document(self, element: Element) -> dict[str, Any]:
        """Convert domain entity to a document."""
        return {
            "_id": element.id.to_primitive(),
            **self.fields_to_document(element),
            "sub_elements": [child.to_primitive() for child in element.sub_elements],
        }

    def fields_to_document(self, element: Element) -> dict[str, Any]:
        """Every stored field except the id and the embedded children."""
        return {
            "name": element.name,
            "description": element.description,
            **self.audit_to_document(element.audit),
        }

    def audit_to_document(self, audit: AuditInfo) -> dict[str, Any]:
        return {
            key: str(value) if isinstance(value, UUID) else value
            for key, value in audit.to_primitive().items()
        }

    def to_domain(self, document: dict[str, Any]) -> Element:
        """Convert a document to a domain entity."""
        details_loaded = "sub_elements" in document
        return Element.create_with_id(
            id=ElementId.parse(document["_id"]),
            name=document["name"],
            description=document["description"],
            sub_elements=[
                SubElement(name=child["name"], value=child["value"])
                for child in document.get("sub_elements") or []
            ],
            audit=AuditInfo(
                created_at=_as_utc(document.get("created_at")),
                creator_id=_str_to_uuid(document.get("creator_id")),
                last_modified_at=_as_utc(document.get("last_modified_at")),
                last_modifier_id=_str_to_uuid(document.get("last_modifier_id")),
                is_deleted=bool(document.get("is_deleted", False)),
                deleted_at=_as_utc(document.get("deleted_at")),
                deleter_id=_str_to_uuid(document.get("deleter_id")),
            ),
            details_loaded=details_loaded,
        )
