"""
This module handles the connection settings for the MongoDB database.
It reads the connection string from the environment (or a .env file),
builds the client and collection used by the movie service, and provides
a standalone connection probe used by the /check endpoint.
movie_api.db.py
"""
import os
import logging
from dataclasses import dataclass
from typing import Callable, List

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.collection import Collection

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_NAME = "gbs"
COLLECTION_NAME = "movies"
DEFAULT_MONGO_URI = "mongodb://localhost:27017"

# driver default is 30s
PROBE_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class DatabaseSettings:
    connection_string: str = DEFAULT_MONGO_URI

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        return cls(connection_string=os.getenv("MONGO_URI", DEFAULT_MONGO_URI))


def get_movies_collection(client: MongoClient) -> Collection:
    return client[DATABASE_NAME][COLLECTION_NAME]


def check_connection(settings: DatabaseSettings, client_factory: Callable[..., MongoClient] = MongoClient) -> List[str]:
    """Open a short-lived client and return the names of the databases on the server.

    The client is always closed before returning. Driver errors are raised to the caller.
    """
    client = client_factory(settings.connection_string, serverSelectionTimeoutMS=PROBE_TIMEOUT_MS)
    try:
        names = client.list_database_names()
    finally:
        client.close()
    logger.debug("Connection probe found %d databases", len(names))
    return names
