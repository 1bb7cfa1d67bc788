"""Per-tenant connection string resolution."""

from collections.abc import Mapping

from elementstore.config import Settings


class ConnectionStringResolver:
    """
    Maps a logical tenant to the database URL it should use.

    Tenants without a dedicated URL share the host database. The resolver
    holds configuration only; callers resolve on every use so a URL is
    never carried from one tenant scope into another.
    """

    def __init__(self, default_url: str, tenant_urls: Mapping[str, str] | None = None) -> None:
        self.default_url = default_url
        self.tenant_urls = dict(tenant_urls or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionStringResolver":
        return cls(settings.DATABASE_URL, settings.TENANT_DATABASE_URLS)

    def resolve(self, tenant: str | None = None) -> str:
        """Return the URL for a tenant, or the host URL when tenant is None."""
        if tenant is None:
            return self.default_url
        return self.tenant_urls.get(tenant, self.default_url)
