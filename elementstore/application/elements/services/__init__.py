from .element_manager import ElementManager

__all__ = [
    "ElementManager",
]
