"""
Driver error classification for the relational backend.

Only two situations mean the store is unavailable: a connection could not
be opened, or an open connection was lost. Every other driver error (a
missing table, a constraint violation, a locked database) propagates as
the SQLAlchemy exception it is.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy.exc import DBAPIError, DisconnectionError, InterfaceError

from elementstore.exceptions import StoreUnavailableError

logger = structlog.get_logger(__name__)

# Anything raised while opening a connection
CONNECT_ERRORS = (DBAPIError, DisconnectionError, OSError)


def is_disconnect(error: BaseException) -> bool:
    """True when the error reports a connection lost mid-operation."""
    if isinstance(error, (InterfaceError, DisconnectionError)):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


def store_unavailable(error: BaseException) -> StoreUnavailableError:
    logger.error("relational_store_unavailable", error=str(error))
    return StoreUnavailableError("relational", message=str(getattr(error, "orig", None) or error))


@contextmanager
def connecting() -> Iterator[None]:
    """Translate failures to open a connection into StoreUnavailableError."""
    try:
        yield
    except CONNECT_ERRORS as e:
        raise store_unavailable(e) from e
