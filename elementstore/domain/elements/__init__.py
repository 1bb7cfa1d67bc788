"""Elements bounded context: the Element aggregate and its SubElements."""

from .entities import Element
from .value_objects import SubElement

__all__ = [
    "Element",
    "SubElement",
]
