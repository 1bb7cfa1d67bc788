from .element_repository import ElementQueryProtocol, ElementRepositoryProtocol

__all__ = [
    "ElementQueryProtocol",
    "ElementRepositoryProtocol",
]
