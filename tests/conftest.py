import mongomock
import pytest
from fastapi.testclient import TestClient

from movie_api.db import DatabaseSettings
from movie_api.main import create_app
from movie_api.movie_service import MongoMovieService


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def service(mongo_client):
    return MongoMovieService(DatabaseSettings(), client=mongo_client)


@pytest.fixture
def client(service, mongo_client):
    app = create_app(movie_service=service, client_factory=lambda *args, **kwargs: mongo_client)
    with TestClient(app) as test_client:
        yield test_client
