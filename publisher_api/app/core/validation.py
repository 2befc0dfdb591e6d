"""
Explicit request-body validation.

Handlers accept the raw JSON body and run it through ``validate_payload``
before any service call.  The result is a tagged ``ValidationResult``:
either ``ok`` with the parsed schema instance in ``value``, or not ok
with pydantic's error list in ``errors``.  ``require_valid`` is the
short form used by handlers; it raises ``ValidationError`` (HTTP 400)
on a failed result, so nothing reaches storage half-validated.

Routes behind the bearer gate read their body with ``read_json_body``
inside the handler, after the token has been checked, so a bad token
is answered with 401 even when the body is not valid JSON.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from .errors import ValidationError


ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ValidationResult(Generic[ModelT]):
    value: Optional[ModelT] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def validate_payload(model: Type[ModelT], payload: Any) -> ValidationResult[ModelT]:
    """Validate ``payload`` against ``model`` without raising."""
    if not isinstance(payload, dict):
        return ValidationResult(errors=[{"loc": ("body",), "msg": "Expected a JSON object", "type": "dict_type"}])
    try:
        return ValidationResult(value=model.model_validate(payload))
    except SchemaError as exc:
        return ValidationResult(errors=exc.errors())


def require_valid(model: Type[ModelT], payload: Any) -> ModelT:
    result = validate_payload(model, payload)
    if not result.ok:
        raise ValidationError(f"Invalid {model.__name__} payload", errors=result.errors)
    return result.value


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON once the route's dependencies have run.

    An empty body yields ``None``.  A body that is not valid JSON raises
    ``ValidationError``, the same 400 a missing field gets.
    """
    if not await request.body():
        return None
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationError("Request body is not valid JSON") from exc
