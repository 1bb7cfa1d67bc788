from .element_document_mapper import ElementDocumentMapper

__all__ = [
    "ElementDocumentMapper",
]
