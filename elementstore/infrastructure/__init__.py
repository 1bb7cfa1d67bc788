"""
Infrastructure layer.

Concrete adapters for the repository and schema-migrator ports:
- relational: SQLAlchemy + Alembic
- document: MongoDB
"""
