from mflix_api.api.movies import router as movies_router
from mflix_api.api.comments import router as comments_router
from mflix_api.api.docs import get_api_description

__all__ = ["movies_router", "comments_router", "get_api_description"]
