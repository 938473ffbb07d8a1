from fastapi import APIRouter, Body, Depends
from mflix_api.core.config import Settings, get_settings
from mflix_api.core.database import MongoDocumentStore, get_store
from mflix_api.core.errors import NotFoundError, StoreError, ValidationError
from mflix_api.core.ids import parse_object_id
from mflix_api.models.schemas import CommentListResponse, CommentResponse, ErrorResponse, MessageResponse
from mflix_api.services.responses import envelope
from mflix_api.services.validators import ensure_valid, validate_comment
from typing import Any, Dict, Optional
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

ERRORS = {
    400: {"model": ErrorResponse, "description": "Bad Request"},
    404: {"model": ErrorResponse, "description": "Comment not found"},
    500: {"model": ErrorResponse, "description": "Internal Server Error"},
}

COMMENT_BODY = Body(None, description="Comment object", openapi_examples={
    "comment": {"value": {
        "name": "Ann",
        "email": "a@x.com",
        "text": "Great film",
        "date": "2024-01-01T00:00:00Z",
    }},
})

def comment_filter(idMovie: str, idComment: str) -> Dict[str, Any]:
    return {
        "_id": parse_object_id(idComment, "idComment"),
        "movie_id": parse_object_id(idMovie, "idMovie"),
    }

@router.get(
    "/movie/{idMovie}/comments",
    tags=["Comments"],
    summary="Get comments for a movie",
    response_model=CommentListResponse,
    responses={400: ERRORS[400], 500: ERRORS[500]},
)
def get_comments(
    idMovie: str,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieve all comments associated with a specific movie. A movie without comments yields an empty list."""
    comments = store.find_many(settings.COMMENTS_COLLECTION, {"movie_id": parse_object_id(idMovie, "idMovie")})
    return envelope(200, data=comments)

@router.post(
    "/movie/{idMovie}/comments",
    tags=["Comments"],
    summary="Add a new comment for a specific movie",
    status_code=201,
    response_model=CommentResponse,
    responses={400: ERRORS[400], 404: {"model": ErrorResponse, "description": "Movie not found"}, 500: ERRORS[500]},
)
def create_comment(
    idMovie: str,
    comment: Optional[Dict[str, Any]] = COMMENT_BODY,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Add a new comment for a specific movie.

    The movie id from the path is used as movie_id when the body omits it;
    a body movie_id pointing at another movie is rejected.
    """
    movie_id = parse_object_id(idMovie, "idMovie")
    data = {key: value for key, value in (comment or {}).items() if key != "_id"}

    if data.get("movie_id") in (None, ""):
        data["movie_id"] = idMovie
    elif parse_object_id(data["movie_id"], "movie_id") != movie_id:
        raise ValidationError(
            "Bad Request. movie_id does not match the movie in the path.",
            details=f"{data['movie_id']} != {idMovie}",
        )

    ensure_valid(validate_comment(data))
    data["movie_id"] = movie_id

    if not store.find_one(settings.MOVIES_COLLECTION, {"_id": movie_id}):
        logger.warning(f"Comment submitted for missing movie {idMovie}")
        raise NotFoundError("Movie not found")

    created = store.insert_one(settings.COMMENTS_COLLECTION, data)
    logger.info(f"Created comment {created['_id']} for movie {idMovie}")
    return envelope(201, data=created, message="Comment added successfully")

@router.get(
    "/movie/{idMovie}/comment/{idComment}",
    tags=["Comment"],
    summary="Get a comment by ID for a specific movie",
    response_model=CommentResponse,
    responses=ERRORS,
)
def get_comment(
    idMovie: str,
    idComment: str,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Retrieve a specific comment by its ID for a given movie."""
    comment = store.find_one(settings.COMMENTS_COLLECTION, comment_filter(idMovie, idComment))
    if not comment:
        raise NotFoundError("Comment not found")
    return envelope(200, data=comment)

@router.put(
    "/movie/{idMovie}/comment/{idComment}",
    tags=["Comment"],
    summary="Update a comment for a specific movie",
    response_model=MessageResponse,
    responses={**ERRORS, 404: {"model": ErrorResponse, "description": "Comment not found or not updated"}},
)
def update_comment(
    idMovie: str,
    idComment: str,
    comment: Optional[Dict[str, Any]] = COMMENT_BODY,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Update a comment for a specific movie using the provided data.

    Responds 404 when no comment matched or the submitted values equal the stored ones.
    """
    comment_query = comment_filter(idMovie, idComment)
    fields = {key: value for key, value in (comment or {}).items() if key != "_id"}
    if not fields:
        raise ValidationError("Bad Request. No fields to update.")
    if "movie_id" in fields:
        fields["movie_id"] = parse_object_id(fields["movie_id"], "movie_id")

    outcome = store.update_one(settings.COMMENTS_COLLECTION, comment_query, fields)
    if outcome.modified_count == 1:
        logger.info(f"Updated comment {idComment} for movie {idMovie}")
        return envelope(200, message="Comment updated successfully")

    logger.warning(f"Comment {idComment} for movie {idMovie} not found or not updated")
    raise NotFoundError("Comment not found or not updated")

@router.delete(
    "/movie/{idMovie}/comment/{idComment}",
    tags=["Comment"],
    summary="Delete a comment for a specific movie",
    response_model=MessageResponse,
    responses=ERRORS,
)
def delete_comment(
    idMovie: str,
    idComment: str,
    store: MongoDocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Delete a comment for a specific movie by its ID. The comment must exist."""
    comment_query = comment_filter(idMovie, idComment)
    if not store.find_one(settings.COMMENTS_COLLECTION, comment_query):
        logger.warning(f"Delete requested for missing comment {idComment}")
        raise NotFoundError("Comment not found")

    outcome = store.delete_one(settings.COMMENTS_COLLECTION, comment_query)
    if outcome.deleted_count == 1:
        logger.info(f"Deleted comment {idComment} for movie {idMovie}")
        return envelope(200, message="Comment deleted successfully")
    if outcome.deleted_count == 0:
        raise NotFoundError("No comment was deleted")

    # delete_one never removes more than one document
    raise StoreError(details=f"Unexpected result: deleted_count = {outcome.deleted_count}")
