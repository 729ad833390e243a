"""
This module is the main entry point for the FastAPI application.
It builds the app and defines the endpoints for listing, reading, creating,
updating and deleting movies, plus a root version string and a /check
endpoint that probes the MongoDB connection on its own short-lived client.
The movie service is created once at startup and injected into the handlers.
movie_api.main.py
"""
import os
import logging
from contextlib import asynccontextmanager
from typing import Callable, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from movie_api.db import DatabaseSettings, check_connection
from movie_api.logging_config import setup_logging
from movie_api.movie_service import Movie, MongoMovieService, MovieService

API_VERSION = "1.0"

logger = logging.getLogger(__name__)


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service


def create_app(
    movie_service: Optional[MovieService] = None,
    settings: Optional[DatabaseSettings] = None,
    client_factory: Callable[..., MongoClient] = MongoClient,
) -> FastAPI:
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    settings = settings or DatabaseSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if movie_service is not None:
            app.state.movie_service = movie_service
            yield
            return
        service = MongoMovieService(settings)
        app.state.movie_service = service
        logger.info("Movie service started")
        try:
            yield
        finally:
            service.close()

    app = FastAPI(title="Movie API", version=API_VERSION, lifespan=lifespan)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return f"Minimal API Version {API_VERSION}"

    @app.get("/check", response_class=PlainTextResponse)
    def check():
        try:
            databases = check_connection(settings, client_factory)
        except PyMongoError as e:
            logger.warning("MongoDB connection check failed: %s", e)
            return f"Error accessing MongoDB: {e}"
        return f"MongoDB access ok. Databases: {','.join(databases)}"

    @app.get("/api/movies", response_model=List[Movie])
    def list_movies(service: MovieService = Depends(get_movie_service)):
        return service.list_all()

    @app.get("/api/movies/{movie_id}", response_model=Movie)
    def get(movie_id: str, service: MovieService = Depends(get_movie_service)):
        movie = service.get_by_id(movie_id)
        if not movie:
            raise HTTPException(status_code=404, detail="Movie not found")
        return movie

    @app.post("/api/movies", response_model=Movie)
    def create(movie: Movie, service: MovieService = Depends(get_movie_service)):
        service.create(movie)
        return movie

    # existence check and write are separate calls; concurrent requests on one id can race
    @app.put("/api/movies/{movie_id}", response_model=Movie)
    def update(movie_id: str, movie: Movie, service: MovieService = Depends(get_movie_service)):
        if not service.get_by_id(movie_id):
            raise HTTPException(status_code=404, detail="Movie not found")
        movie.Id = movie_id
        service.update(movie_id, movie)
        return movie

    @app.delete("/api/movies/{movie_id}")
    def delete(movie_id: str, service: MovieService = Depends(get_movie_service)):
        if not service.get_by_id(movie_id):
            raise HTTPException(status_code=404, detail="Movie not found")
        service.delete(movie_id)
        return Response(status_code=200)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("movie_api.main:app", host=os.getenv("HOST", "localhost"), port=int(os.getenv("PORT", 8000)), reload=True)
