"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity and lifecycle
- AuditInfo: Composed creation/modification/deletion metadata
- IdentityGenerator: Source of new aggregate identities
"""

from .auditing import AuditInfo, AuditStamper
from .entity import Entity, EntityId
from .exceptions import (
    DetailsNotLoadedError,
    DomainError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from .identity import IdentityGenerator, RandomIdentityGenerator, SequentialIdentityGenerator
from .value_object import ValueObject

__all__ = [
    "AuditInfo",
    "AuditStamper",
    "DetailsNotLoadedError",
    "DomainError",
    "DuplicateEntityError",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "IdentityGenerator",
    "RandomIdentityGenerator",
    "SequentialIdentityGenerator",
    "ValidationError",
    "ValueObject",
]
