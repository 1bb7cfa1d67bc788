"""Common value objects shared across all domain modules."""

from .ids import ElementId

__all__ = [
    "ElementId",
]
