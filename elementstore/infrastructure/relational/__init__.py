"""
Relational backend.

SQLAlchemy (asyncio) models, repository and mapper for the Element
aggregate, plus Alembic-based schema migration.
"""

from .connection_resolver import ConnectionStringResolver
from .element_repository import SqlAlchemyElementQuery, SqlAlchemyElementRepository
from .schema_migrator import AlembicSchemaMigrator

__all__ = [
    "AlembicSchemaMigrator",
    "ConnectionStringResolver",
    "SqlAlchemyElementQuery",
    "SqlAlchemyElementRepository",
]
