"""Procedure registry and call context for the RPC endpoint."""

from __future__ import annotations

from dataclasses import dataclass, is_dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel

from ...errors import UnauthorizedError
from ...extensions import Services
from ...services.auth import ADMIN_ROLE
from ...validation import parse_model

QUERY = "query"
MUTATION = "mutation"


@dataclass
class CallContext:
    """Per-call state handed to procedure handlers."""

    services: Services
    role: str
    new_session_token: Optional[str] = None
    clear_session: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


Handler = Callable[[CallContext, Any], Any]


def to_jsonable(value: Any) -> Any:
    """Convert handler results (models, dataclasses, containers) to JSON-ready data."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if is_dataclass(value) and hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    handler: Handler
    admin: bool = False
    input_model: Optional[type[BaseModel]] = None

    @property
    def http_method(self) -> str:
        return "GET" if self.kind == QUERY else "POST"

    def invoke(self, ctx: CallContext, raw_input: Any) -> Any:
        if self.admin and not ctx.is_admin:
            raise UnauthorizedError()
        data = parse_model(self.input_model, raw_input) if self.input_model is not None else None
        return to_jsonable(self.handler(ctx, data))


class ProcedureRegistry:
    """Maps dotted procedure names (``finance.transactions.list``) to handlers."""

    def __init__(self) -> None:
        self._procedures: dict[str, Procedure] = {}

    def register(
        self,
        name: str,
        *,
        kind: str,
        admin: bool = False,
        input_model: Optional[type[BaseModel]] = None,
    ) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            if name in self._procedures:
                raise ValueError(f"Procedure already registered: {name}")
            self._procedures[name] = Procedure(name, kind, handler, admin=admin, input_model=input_model)
            return handler

        return decorator

    def query(self, name: str, **kwargs) -> Callable[[Handler], Handler]:
        return self.register(name, kind=QUERY, **kwargs)

    def mutation(self, name: str, **kwargs) -> Callable[[Handler], Handler]:
        return self.register(name, kind=MUTATION, **kwargs)

    def get(self, name: str) -> Optional[Procedure]:
        return self._procedures.get(name)

    def names(self) -> list[str]:
        return sorted(self._procedures)


registry = ProcedureRegistry()
