"""This module serves as a service layer for the movie database, providing
the operations to list, read, create, update and delete movie documents.
Movies are stored in a single MongoDB collection keyed by their Id, which is
kept in the document's _id field. Fields other than Id are stored as they
arrive and returned unchanged.
movie_api.movie_service.py
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel
from pymongo import MongoClient

from movie_api.db import DatabaseSettings, get_movies_collection

logger = logging.getLogger(__name__)


class Movie(BaseModel):
    Id: Optional[str] = None

    class Config:
        extra = "allow"


def to_document(movie: Movie) -> Dict[str, Any]:
    doc = movie.model_dump(exclude={"Id"})
    if movie.Id is not None:
        doc["_id"] = movie.Id
    return doc

def from_document(doc: Dict[str, Any]) -> Movie:
    doc = dict(doc)
    doc.pop("Id", None)
    return Movie(Id=str(doc.pop("_id")), **doc)

def id_filter(movie_id: str) -> Dict[str, Any]:
    # documents inserted by other clients carry ObjectId keys that list as their hex string
    if ObjectId.is_valid(movie_id):
        return {"_id": {"$in": [movie_id, ObjectId(movie_id)]}}
    return {"_id": movie_id}


class MovieService(ABC):
    """Storage operations for movies. Implementations must be safe to share between requests."""

    @abstractmethod
    def list_all(self) -> List[Movie]:
        ...

    @abstractmethod
    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        ...

    @abstractmethod
    def create(self, movie: Movie) -> None:
        """Store a new movie. An unset Id is assigned and written back onto ``movie``."""

    @abstractmethod
    def update(self, movie_id: str, movie: Movie) -> None:
        """Replace the stored movie with ``movie``. Does nothing if ``movie_id`` is unknown."""

    @abstractmethod
    def delete(self, movie_id: str) -> None:
        ...


class MongoMovieService(MovieService):
    def __init__(self, settings: DatabaseSettings, client: Optional[MongoClient] = None):
        self._owns_client = client is None
        self._client = client if client is not None else MongoClient(settings.connection_string)
        self._collection = get_movies_collection(self._client)

    def list_all(self) -> List[Movie]:
        return [from_document(doc) for doc in self._collection.find({})]

    def get_by_id(self, movie_id: str) -> Optional[Movie]:
        doc = self._collection.find_one(id_filter(movie_id))
        if not doc:
            return None
        return from_document(doc)

    def create(self, movie: Movie) -> None:
        if not movie.Id:
            movie.Id = str(ObjectId())
        self._collection.insert_one(to_document(movie))
        logger.info("Created movie %s", movie.Id)

    def update(self, movie_id: str, movie: Movie) -> None:
        movie.Id = movie_id
        replacement = to_document(movie)
        # _id is immutable; the filter already pins it
        replacement.pop("_id")
        result = self._collection.replace_one(id_filter(movie_id), replacement)
        logger.info("Updated movie %s (matched %d)", movie_id, result.matched_count)

    def delete(self, movie_id: str) -> None:
        result = self._collection.delete_one(id_filter(movie_id))
        logger.info("Deleted movie %s (deleted %d)", movie_id, result.deleted_count)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
