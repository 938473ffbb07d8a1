from dataclasses import dataclass, field
from pydantic import BaseModel
from mflix_api.core.errors import ValidationError
from mflix_api.models.schemas import CommentSchema, MovieSchema
from typing import Any, List, Type

@dataclass
class ValidationResult:
    missing: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing

def required_fields(schema: Type[BaseModel]) -> List[str]:
    """Names of the fields the schema declares without a default, in declaration order."""
    return [name for name, info in schema.model_fields.items() if info.is_required()]

def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple, set)):
        return len(value) == 0
    return False

def validate_required_fields(schema: Type[BaseModel], payload: Any) -> ValidationResult:
    """
    Checks that every required field of the schema is present and non-empty in the payload.
    No type checking is done beyond presence.
    """
    required = required_fields(schema)
    if not isinstance(payload, dict):
        return ValidationResult(missing=required)
    return ValidationResult(missing=[name for name in required if _is_blank(payload.get(name))])

def validate_movie(payload: Any) -> ValidationResult:
    return validate_required_fields(MovieSchema, payload)

def validate_comment(payload: Any) -> ValidationResult:
    return validate_required_fields(CommentSchema, payload)

def ensure_valid(result: ValidationResult) -> None:
    if not result.ok:
        raise ValidationError(
            "Bad Request. Missing required fields.",
            details=f"Missing: {', '.join(result.missing)}",
        )
