"""MongoDB client construction and collection mapping."""

from typing import Any

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from elementstore.constants import ELEMENTS_COLLECTION

logger = structlog.get_logger(__name__)


def create_mongo_client(url: str) -> AsyncMongoClient:
    """
    Create an async MongoDB client.

    The client connects lazily, so building one never blocks or fails on
    an unreachable server; the first operation does.
    """
    logger.debug("mongo_client_created")
    return AsyncMongoClient(url, tz_aware=True)


def get_database(client: AsyncMongoClient, name: str) -> AsyncDatabase:
    return client.get_database(name)


class ElementDocumentContext:
    """Names and hands out the collections used by the document backend."""

    def __init__(self, database: AsyncDatabase) -> None:
        self.database = database

    @property
    def elements(self) -> AsyncCollection[dict[str, Any]]:
        """Collection holding one document per Element."""
        return self.database[ELEMENTS_COLLECTION]
