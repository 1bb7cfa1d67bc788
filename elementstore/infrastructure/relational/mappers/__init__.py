from .element_mapper import ElementMapper

__all__ = [
    "ElementMapper",
]
