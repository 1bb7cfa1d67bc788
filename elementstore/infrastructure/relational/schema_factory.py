"""
Design-time schema factory.

Builds the Alembic configuration used by schema commands (upgrade,
downgrade, revision) that run outside the service. The connection string
comes from an env file on disk, so nothing but this module and the
migration scripts needs to load.
"""

from pathlib import Path

from alembic.config import Config
from sqlalchemy.engine import Connection

from elementstore.config import MIGRATIONS_DIR, Settings
from elementstore.exceptions import ConfigurationError
from elementstore.infrastructure.relational.connection_resolver import ConnectionStringResolver

DEFAULT_ENV_FILE = ".env"


def load_design_time_settings(env_file: str | Path | None = None) -> Settings:
    """
    Read settings from an env file.

    Raises:
        ConfigurationError: If the file does not exist
    """
    path = Path(env_file or DEFAULT_ENV_FILE)
    if not path.is_file():
        raise ConfigurationError(f"Settings file not found: {path}")
    return Settings(_env_file=path)  # type: ignore[call-arg]


def build_alembic_config(url: str | None = None, connection: Connection | None = None) -> Config:
    """
    Build an Alembic Config pointing at the packaged migration scripts.

    Args:
        url: Database URL for commands that open their own connection
        connection: Already-open connection to run migrations on
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    if url:
        # ConfigParser interpolation treats "%" specially
        config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    if connection is not None:
        config.attributes["connection"] = connection
    return config


def create_schema_config(env_file: str | Path | None = None, tenant: str | None = None) -> Config:
    """Alembic Config for a tenant, with the URL taken from an env file."""
    settings = load_design_time_settings(env_file)
    url = ConnectionStringResolver.from_settings(settings).resolve(tenant)
    return build_alembic_config(url)
