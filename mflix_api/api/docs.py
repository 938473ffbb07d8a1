from fastapi import Request
from fastapi.responses import JSONResponse

async def get_api_description(request: Request):
    """Serves the OpenAPI document generated from the registered routes."""
    return JSONResponse(request.app.openapi())
