"""Turn untrusted payloads into validated models."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import BadRequestError

ModelT = TypeVar("ModelT", bound=BaseModel)


def summarize_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(piece) for piece in error.get("loc", ())) or "input"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def parse_model(model: type[ModelT], payload: Any) -> ModelT:
    """Validate `payload` against `model`, raising `BadRequestError` on failure."""

    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload if payload is not None else {})
    except ValidationError as exc:
        raise BadRequestError(f"Dados inválidos: {summarize_validation_error(exc)}") from exc
