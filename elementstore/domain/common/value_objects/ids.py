from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True, eq=False)
class ElementId(EntityId):
    """Strongly-typed element identifier."""
