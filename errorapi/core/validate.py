"""
errorapi.core.validate
───────────────────────
Schema validation via Pydantic v2. Raises errorapi ValidationError
(not raw Pydantic errors) so callers handle a single error type.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from errorapi.core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a Pydantic model.

    Usage:
        event = validate_input(ErrorEvent, request_body)
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        raise ValidationError(
            f"Invalid {model.__name__} payload.",
            fields=fields,
        ) from exc
