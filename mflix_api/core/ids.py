from bson import ObjectId
from bson.errors import InvalidId
from mflix_api.core.errors import ValidationError

def parse_object_id(value, field: str = "id") -> ObjectId:
    """
    Convert a path or payload identifier into a MongoDB ObjectId.

    Raises ValidationError (400) when the value is not a 24 character hex
    string or 12 byte id.
    """
    if isinstance(value, ObjectId):
        return value
    try:
        # ObjectId(None) would mint a fresh id
        if value is None:
            raise TypeError("id is None")
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(
            f"Bad Request. Invalid {field}.",
            details=f"'{value}' is not a valid ObjectId",
        )
