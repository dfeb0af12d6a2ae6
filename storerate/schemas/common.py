"""
Shared schema helpers
camelCase JSON base model and conversion of pydantic errors into per-field messages
"""

from typing import Any, Dict, Iterable, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from storerate.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON, both accepted on input"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Response model carrying a human readable message"""
    message: str = Field(..., description="Result message")


def field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """
    Collapse pydantic error dicts into {field: message}

    The request location prefix ("body", "query") is dropped and only the
    first message per field is kept.
    """
    result: Dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if error.get("type") == "json_invalid":
            field = "body"
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        else:
            message = error.get("msg", "Invalid value")
        result.setdefault(field, message)
    return result


def parse(schema: Type[ModelT], data: Any) -> ModelT:
    """
    Validate raw input against a schema

    Args:
        schema: Pydantic model class
        data: Raw input (usually a dict decoded from JSON)

    Returns:
        Validated model instance

    Raises:
        ValidationError: with per-field messages if any constraint fails
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Invalid request", errors=field_errors(e.errors()))
