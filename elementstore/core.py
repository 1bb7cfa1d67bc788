"""
Composition root.

Wires the repository, schema migrator and application services for the
backend named by ``DATABASE_PROVIDER``. Only the selected branch is ever
built, so a relational deployment never opens a MongoDB client and vice
versa.
"""

from dependency_injector import containers, providers

from elementstore.application.data.db_migration_service import DbMigrationService
from elementstore.application.data.element_data_seeder import ElementDataSeeder
from elementstore.application.data.schema_migrator import NullSchemaMigrator
from elementstore.application.elements.services.element_manager import ElementManager
from elementstore.config import Settings, get_settings
from elementstore.domain.common.auditing import AuditStamper
from elementstore.domain.common.identity import SequentialIdentityGenerator
from elementstore.infrastructure.document.context import (
    ElementDocumentContext,
    create_mongo_client,
    get_database,
)
from elementstore.infrastructure.document.element_repository import MongoElementRepository
from elementstore.infrastructure.relational.connection_resolver import ConnectionStringResolver
from elementstore.infrastructure.relational.database import (
    create_engine,
    create_session_factory,
)
from elementstore.infrastructure.relational.element_repository import (
    SqlAlchemyElementRepository,
)
from elementstore.infrastructure.relational.schema_migrator import AlembicSchemaMigrator


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    config = providers.Configuration()

    # Collaborators
    identity_generator = providers.Singleton(SequentialIdentityGenerator)
    audit_stamper = providers.Singleton(AuditStamper)

    # Relational backend
    connection_resolver = providers.Singleton(
        ConnectionStringResolver,
        default_url=config.DATABASE_URL,
        tenant_urls=config.TENANT_DATABASE_URLS,
    )
    sql_engine = providers.Singleton(create_engine, url=config.DATABASE_URL, echo=config.SQL_ECHO)
    sql_session_factory = providers.Singleton(create_session_factory, engine=sql_engine)

    # Document backend
    mongo_client = providers.Singleton(create_mongo_client, url=config.MONGO_URL)
    mongo_database = providers.Singleton(
        get_database, client=mongo_client, name=config.MONGO_DATABASE
    )
    document_context = providers.Singleton(ElementDocumentContext, database=mongo_database)

    # Ports
    element_repository = providers.Selector(
        config.DATABASE_PROVIDER,
        relational=providers.Factory(
            SqlAlchemyElementRepository,
            session_factory=sql_session_factory,
            audit_stamper=audit_stamper,
        ),
        document=providers.Factory(
            MongoElementRepository,
            context=document_context,
            audit_stamper=audit_stamper,
        ),
    )
    schema_migrator = providers.Selector(
        config.DATABASE_PROVIDER,
        relational=providers.Factory(
            AlembicSchemaMigrator,
            connection_resolver=connection_resolver,
            echo=config.SQL_ECHO,
            engine=sql_engine,
        ),
        document=providers.Factory(NullSchemaMigrator),
    )

    # Services
    element_manager = providers.Factory(
        ElementManager,
        element_repository=element_repository,
        identity_generator=identity_generator,
    )
    element_data_seeder = providers.Factory(
        ElementDataSeeder,
        element_repository=element_repository,
        identity_generator=identity_generator,
    )
    db_migration_service = providers.Factory(
        DbMigrationService,
        schema_migrator=schema_migrator,
        data_seeder=element_data_seeder,
    )


def create_container(settings: Settings | None = None, tenant: str | None = None) -> Container:
    """
    Build a container for one logical scope.

    Args:
        settings: Settings to wire from (defaults to the cached settings)
        tenant: Tenant whose database the repositories should use.
            Only affects the relational backend.
    """
    settings = settings or get_settings()
    if tenant is not None:
        tenant_url = ConnectionStringResolver.from_settings(settings).resolve(tenant)
        settings = settings.model_copy(update={"DATABASE_URL": tenant_url})

    container = Container()
    container.config.from_dict(settings.model_dump())
    return container


async def shutdown_container(container: Container) -> None:
    """Release the connection pool or client held by the selected backend."""
    if container.config.DATABASE_PROVIDER() == "relational":
        await container.sql_engine().dispose()
    else:
        await container.mongo_client().close()
