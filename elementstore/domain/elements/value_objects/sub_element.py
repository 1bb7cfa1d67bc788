"""SubElement value object: a named key/value pair owned by an Element."""

from __future__ import annotations

from dataclasses import dataclass

from elementstore.domain.common.exceptions import check_not_none
from elementstore.domain.common.value_object import ValueObject


@dataclass(frozen=True, eq=False)
class SubElement(ValueObject):
    """
    Named key/value pair.

    Two sub-elements are equal when both name and value match ignoring
    case. That comparison is the deduplication key used by Element.
    """

    name: str
    value: str

    def __post_init__(self) -> None:
        check_not_none(self.name, "name")
        check_not_none(self.value, "value")

    def _components(self) -> tuple[str, str]:
        return self.name.casefold(), self.value.casefold()
