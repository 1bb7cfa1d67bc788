"""Infrastructure-level exception hierarchy for elementstore."""


class ElementStoreError(Exception):
    """Base exception for all non-domain elementstore errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class StoreUnavailableError(ElementStoreError):
    """The underlying connection or collection cannot be reached."""

    def __init__(self, backend: str, *, message: str | None = None) -> None:
        """Initialize with the backend name and optional detail."""
        self.backend = backend
        if message:
            super().__init__(f"{backend} store unavailable: {message}")
        else:
            super().__init__(f"{backend} store unavailable")


class ConfigurationError(ElementStoreError):
    """Configuration is missing or inconsistent."""
