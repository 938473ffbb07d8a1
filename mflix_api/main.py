from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import compile_path
from mflix_api.api import comments_router, get_api_description, movies_router
from mflix_api.core.config import Settings, settings as default_settings
from mflix_api.core.database import MongoDocumentStore
from mflix_api.core.errors import ApiError, MethodNotAllowedError, StoreError, ValidationError
from typing import Optional, Set
import logging

logging.basicConfig(level=default_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

TAGS = [
    {"name": "Movies", "description": "The movies collection."},
    {"name": "Movie", "description": "A single movie."},
    {"name": "Comments", "description": "Comments attached to a movie."},
    {"name": "Comment", "description": "A single comment of a movie."},
]

HTTP_VERBS = {"get", "put", "post", "delete", "patch", "head", "options", "trace"}

def allowed_methods(request: Request) -> Set[str]:
    """
    Verbs registered for the request path, across every operation whose path template matches it.
    Read from the generated OpenAPI paths, which already carry router prefixes.
    """
    path = request.scope["path"]
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        path = path[len(root_path):]

    methods = set()
    for template, operations in request.app.openapi().get("paths", {}).items():
        path_regex, _, _ = compile_path(template)
        if path_regex.match(path):
            methods |= {verb.upper() for verb in operations if verb in HTTP_VERBS}
    return methods

async def api_error_handler(request: Request, exc: ApiError):
    if isinstance(exc, StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

async def method_not_allowed_handler(request: Request, exc: MethodNotAllowedError):
    return PlainTextResponse(str(exc), status_code=405, headers=exc.headers)

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        # Starlette only reports the first partially matching route
        hinted = (exc.headers or {}).get("Allow", "")
        allowed = allowed_methods(request) | {verb.strip() for verb in hinted.split(",") if verb.strip()}
        return await method_not_allowed_handler(request, MethodNotAllowedError(request.method, allowed))
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("Bad Request. Invalid request body.", details=str(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

def create_app(settings: Optional[Settings] = None, store: Optional[MongoDocumentStore] = None) -> FastAPI:
    """
    Builds the application and wires its document store.

    - **settings**: configuration, defaults to the environment-derived settings
    - **store**: document store handed to every handler, defaults to a MongoDB store built from settings
    """
    settings = settings or default_settings
    store = store or MongoDocumentStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.store.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="REST API over the movies and comments of the Mflix sample database.",
        version=settings.VERSION,
        openapi_tags=TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(MethodNotAllowedError, method_not_allowed_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(movies_router, prefix=settings.API_PREFIX)
    app.include_router(comments_router, prefix=settings.API_PREFIX)
    app.add_api_route(settings.DOC_PATH, get_api_description, methods=["GET"], include_in_schema=False)

    logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} configured for database '{settings.MONGODB_DB_NAME}'")
    return app

app = create_app()
