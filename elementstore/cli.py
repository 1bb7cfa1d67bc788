"""
CLI: ``elementstore`` - database migration and schema commands.

``elementstore migrate`` brings the configured store up to date and seeds it.
``elementstore schema ...`` drives Alembic directly against the relational
store named in an env file.
"""

import asyncio
from pathlib import Path

import typer
from alembic import command
from alembic.config import Config

from elementstore.config import configure_logging, get_settings
from elementstore.core import create_container, shutdown_container
from elementstore.domain.common.exceptions import DomainError
from elementstore.exceptions import ElementStoreError
from elementstore.infrastructure.relational.schema_factory import (
    DEFAULT_ENV_FILE,
    create_schema_config,
)

app = typer.Typer(name="elementstore", no_args_is_help=True)
schema_app = typer.Typer(no_args_is_help=True)
app.add_typer(schema_app, name="schema", help="Relational schema management.")

EnvFileOption = typer.Option(
    Path(DEFAULT_ENV_FILE), "--env-file", "-e", help="Settings file holding DATABASE_URL"
)
TenantOption = typer.Option(None, "--tenant", "-t", help="Tenant name (host database if omitted)")


async def _run_migration(tenant: str | None) -> int:
    container = create_container(get_settings(), tenant=tenant)
    try:
        return await container.db_migration_service().migrate(tenant)
    finally:
        await shutdown_container(container)


@app.command()
def migrate(
    tenant: str | None = TenantOption,
    all_tenants: bool = typer.Option(
        False, "--all-tenants", help="Also migrate every configured tenant database"
    ),
) -> None:
    """Apply pending schema changes and seed initial data."""
    settings = get_settings()
    configure_logging(settings.ENVIRONMENT)

    scopes: list[str | None] = [tenant]
    if all_tenants:
        scopes = [None, *sorted(settings.TENANT_DATABASE_URLS)]

    for scope in scopes:
        try:
            seeded = asyncio.run(_run_migration(scope))
        except (ElementStoreError, DomainError) as e:
            typer.echo(f"Migration failed for {scope or 'host'}: {e}", err=True)
            raise typer.Exit(1) from e
        typer.echo(f"Migrated {scope or 'host'} ({seeded} elements seeded)")


@schema_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    env_file: Path = EnvFileOption,
    tenant: str | None = TenantOption,
    sql: bool = typer.Option(False, "--sql", help="Print SQL instead of executing it"),
) -> None:
    """Upgrade the schema to a revision."""
    command.upgrade(_schema_config(env_file, tenant), revision, sql=sql)


@schema_app.command()
def downgrade(
    revision: str = typer.Argument(..., help="Target revision, e.g. -1 or base"),
    env_file: Path = EnvFileOption,
    tenant: str | None = TenantOption,
    sql: bool = typer.Option(False, "--sql", help="Print SQL instead of executing it"),
) -> None:
    """Downgrade the schema to a revision."""
    command.downgrade(_schema_config(env_file, tenant), revision, sql=sql)


@schema_app.command()
def current(
    env_file: Path = EnvFileOption,
    tenant: str | None = TenantOption,
) -> None:
    """Show the revision the database is at."""
    command.current(_schema_config(env_file, tenant))


@schema_app.command()
def revision(
    message: str = typer.Option(..., "--message", "-m", help="Revision message"),
    autogenerate: bool = typer.Option(
        True, "--autogenerate/--empty", help="Diff the models against the database"
    ),
    env_file: Path = EnvFileOption,
) -> None:
    """Create a new migration script."""
    command.revision(_schema_config(env_file, None), message=message, autogenerate=autogenerate)


def _schema_config(env_file: Path, tenant: str | None) -> Config:
    try:
        return create_schema_config(env_file, tenant)
    except ElementStoreError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e


if __name__ == "__main__":
    app()
