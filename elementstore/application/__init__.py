"""
Application layer.

Holds the ports the domain is persisted through (repository and schema
migrator protocols) and the services that drive them: the element manager,
the seed procedure and the bootstrap migration service.
"""
