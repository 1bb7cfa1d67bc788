"""
Document backend.

Stores each Element as a single MongoDB document with its sub-elements
embedded. There is no schema to migrate; see NullSchemaMigrator.
"""

from .context import ElementDocumentContext, create_mongo_client, get_database
from .element_repository import MongoElementQuery, MongoElementRepository

__all__ = [
    "ElementDocumentContext",
    "MongoElementQuery",
    "MongoElementRepository",
    "create_mongo_client",
    "get_database",
]
