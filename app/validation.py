"""
Request validation: payload in, validated schema or per-field error map out.
"""
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .responses import ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_REQUEST_SOURCES = ("body", "query", "path", "header", "cookie")


def _field_name(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_SOURCES and len(parts) > 1 and isinstance(parts[1], str):
        parts = parts[1:]
    elif parts and parts[0] in _REQUEST_SOURCES:
        return parts[0]
    return ".".join(str(p) for p in parts) or "body"


def _message(error: Dict[str, Any]) -> str:
    # Custom ValueErrors raised by validators carry a readable message already
    if error.get("type") == "value_error":
        cause = error.get("ctx", {}).get("error")
        if cause is not None:
            return str(cause)
    return error.get("msg", "Invalid value")


def format_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic/FastAPI error dicts into {field: [messages]}."""
    grouped: Dict[str, List[str]] = {}
    for error in errors:
        field = _field_name(tuple(error.get("loc", ())))
        grouped.setdefault(field, []).append(_message(error))
    return grouped


def validate_payload(schema: Type[SchemaT], payload: Any) -> SchemaT:
    """Validate a raw payload against a request schema.

    Raises ValidationError with a field map when any rule fails.
    """
    try:
        return schema.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError(format_errors(exc.errors()))
