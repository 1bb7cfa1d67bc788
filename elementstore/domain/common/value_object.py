"""
Base class for Value Objects.

Value Objects are immutable objects that are defined by their attributes
rather than by identity. Two value objects are equal if their equality
components are equal.

Example:
    @dataclass(frozen=True, eq=False)
    class ConnectionName(ValueObject):
        value: str

        def __post_init__(self) -> None:
            if not self.value:
                raise ValidationError("Connection name cannot be empty")
"""

from dataclasses import fields
from typing import Any


class ValueObject:
    """
    Base class for Value Objects in the domain model.

    Value Objects are:
    - Immutable (use frozen=True in dataclass)
    - Compared by value (see _components)
    - Self-validating (validation in __post_init__)

    Subclasses are dataclasses declared with eq=False, so equality and
    hashing come from here. Override _components to compare on something
    other than the raw field values.
    """

    def _components(self) -> tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._components() == other._components()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._components()))

    def to_primitive(self) -> Any:
        """
        Convert to primitive Python types for serialization.

        Returns a dict of field values. Override for single-value objects
        that serialize to a scalar.
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]
