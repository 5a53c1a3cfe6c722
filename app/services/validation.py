# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: request validation.
Stateless wrapper over pydantic; one instance is built at startup and
handed to every service that needs it.
"""

import uuid
from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestValidator:
    """Turns raw input into a validated request model or raises ValidationFailed."""

    def validate(self, model: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(dict(data))
        except ValidationError as exc:
            errors = [
                {
                    "field": ".".join(str(p) for p in err["loc"]),
                    "message": err["msg"],
                }
                for err in exc.errors()
            ]
            summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
            raise ValidationFailed(f"validation failed: {summary}", errors=errors) from exc

    def parse_uuid(self, value: Any, field: str = "id") -> uuid.UUID:
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value))
        except (TypeError, ValueError) as exc:
            raise ValidationFailed(
                f"validation failed: {field}: invalid UUID",
                errors=[{"field": field, "message": "invalid UUID"}],
            ) from exc
