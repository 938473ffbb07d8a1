from fastapi import APIRouter, Body, Depends
from mflix_api.core.config import Settings, get_settings
from mflix_api.core.database import MongoDocumentStore, get_store
from mflix_api.core.errors import NotFoundError, ValidationError
from mflix_api.core.ids import parse_object_id
from mflix_api.models.schemas import ErrorResponse, MessageResponse, MovieListResponse, MovieResponse
from mflix_api.services.responses import envelope
from mflix_api.services.validators import ensure_valid, validate_movie
from typing import Any, Dict, Optional
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

ERRORS = {
    400: {"model": ErrorResponse, "description": "Bad Request"},
    404: {"model": ErrorResponse, "description": "Movie not found"},
    500: {"model": ErrorResponse, "description": "Internal Server Error"},
}

MOVIE_BODY = Body(None, description="Movie object", openapi_examples={
    "movie": {"value": {"title": "The Great Train Robbery", "year": 1903, "genres": ["Short", "Western"]}},
})

@router.get(
    "/movies",
    tags=["Movies"],
    summary="Get all movies",
    response_model=MovieListResponse,
    responses={500: ERRORS[500]},
)
def get_movies(
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieve a list of all movies."""
    movies = store.find_many(settings.MOVIES_COLLECTION)
    return envelope(200, data=movies)

@router.post(
    "/movies",
    tags=["Movies"],
    summary="Create a new movie",
    status_code=201,
    response_model=MovieResponse,
    responses={400: ERRORS[400], 500: ERRORS[500]},
)
def create_movie(
    movie: Optional[Dict[str, Any]] = MOVIE_BODY,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Add a new movie to the database. Only the title is required."""
    ensure_valid(validate_movie(movie))
    data = {key: value for key, value in movie.items() if key != "_id"}
    created = store.insert_one(settings.MOVIES_COLLECTION, data)
    logger.info(f"Created movie {created['_id']} ({created.get('title')})")
    return envelope(201, data=created, message="Movie added successfully")

@router.get(
    "/movie/{idMovie}",
    tags=["Movie"],
    summary="Get movie by ID",
    response_model=MovieResponse,
    responses=ERRORS,
)
def get_movie(
    idMovie: str,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Get a movie by its ID."""
    movie = store.find_one(settings.MOVIES_COLLECTION, {"_id": parse_object_id(idMovie, "idMovie")})
    if not movie:
        raise NotFoundError("Movie not found")
    return envelope(200, data=movie)

@router.put(
    "/movie/{idMovie}",
    tags=["Movie"],
    summary="Update movie by ID",
    response_model=MessageResponse,
    responses=ERRORS,
)
def update_movie(
    idMovie: str,
    movie: Optional[Dict[str, Any]] = MOVIE_BODY,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Update a movie by its ID.

    Only the supplied fields are overwritten; every other field keeps its value.
    """
    movie_filter = {"_id": parse_object_id(idMovie, "idMovie")}
    if not store.find_one(settings.MOVIES_COLLECTION, movie_filter):
        logger.warning(f"Update requested for missing movie {idMovie}")
        raise NotFoundError("Movie not found")

    fields = {key: value for key, value in (movie or {}).items() if key != "_id"}
    if not fields:
        raise ValidationError("Bad Request. No fields to update.")

    store.update_one(settings.MOVIES_COLLECTION, movie_filter, fields)
    logger.info(f"Updated movie {idMovie}: {sorted(fields)}")
    return envelope(200, message="Movie updated successfully")

@router.delete(
    "/movie/{idMovie}",
    tags=["Movie"],
    summary="Delete movie by ID",
    response_model=MessageResponse,
    responses={400: ERRORS[400], 500: ERRORS[500]},
)
def delete_movie(
    idMovie: str,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Delete a movie by its ID. Deleting a movie that does not exist still succeeds."""
    outcome = store.delete_one(settings.MOVIES_COLLECTION, {"_id": parse_object_id(idMovie, "idMovie")})
    logger.info(f"Deleted movie {idMovie} (deleted_count={outcome.deleted_count})")
    return envelope(200, message="Movie deleted successfully")
