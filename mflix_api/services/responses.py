from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Any, Optional

def encode(document: Any) -> Any:
    """Makes store documents JSON safe: ObjectIds become hex strings, datetimes ISO 8601."""
    return jsonable_encoder(document, custom_encoder={ObjectId: str})

def envelope(status_code: int, data: Any = None, message: Optional[str] = None) -> JSONResponse:
    body = {"status": status_code}
    if data is not None:
        body["data"] = encode(data)
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)
