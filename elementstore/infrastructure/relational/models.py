"""Database models for the relational backend."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from elementstore.constants import (
    ELEMENTS_TABLE,
    MAX_NAME_LENGTH,
    MAX_SUB_ELEMENT_NAME_LENGTH,
    MAX_SUB_ELEMENT_VALUE_LENGTH,
    SUB_ELEMENTS_TABLE,
)
from elementstore.infrastructure.relational.database import Base


class Element(Base):
    """One row per Element aggregate, audit columns included."""

    __tablename__ = ELEMENTS_TABLE

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Audit
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    creator_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    last_modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    last_modifier_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(), index=True
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    deleter_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    sub_elements: Mapped[list["SubElement"]] = relationship(
        cascade="all, delete-orphan",
        order_by="SubElement.position",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation of Element."""
        return f"<Element(id={self.id}, name='{self.name}')>"


class SubElement(Base):
    """One row per SubElement, ordered within its owner by position."""

    __tablename__ = SUB_ELEMENTS_TABLE

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    element_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey(f"{ELEMENTS_TABLE}.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(MAX_SUB_ELEMENT_NAME_LENGTH), nullable=False)
    value: Mapped[str] = mapped_column(String(MAX_SUB_ELEMENT_VALUE_LENGTH), nullable=False)

    def __repr__(self) -> str:
        """String representation of SubElement."""
        return f"<SubElement(element_id={self.element_id}, name='{self.name}')>"
