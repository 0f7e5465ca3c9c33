"""Application error taxonomy shared by services and the HTTP layer."""

from __future__ import annotations

from typing import ClassVar


class AppError(Exception):
    """Domain error carrying a machine code and a human-readable message."""

    code: ClassVar[str] = "INTERNAL_SERVER_ERROR"
    http_status: ClassVar[int] = 500
    default_message: ClassVar[str] = "Erro interno."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, object]:
        return {"code": self.code, "httpStatus": self.http_status}


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    http_status = 401
    default_message = "Não autorizado."


class NotFoundError(AppError):
    code = "NOT_FOUND"
    http_status = 404
    default_message = "Registro não encontrado."


class BadRequestError(AppError):
    code = "BAD_REQUEST"
    http_status = 400
    default_message = "Requisição inválida."


class MethodNotSupportedError(AppError):
    code = "METHOD_NOT_SUPPORTED"
    http_status = 405
    default_message = "Método não suportado."


class PreconditionFailedError(AppError):
    """Raised when the storage backend refuses writes for an operational reason."""

    code = "PRECONDITION_FAILED"
    http_status = 412
    default_message = "Pré-condição falhou."


class InternalError(AppError):
    pass


def missing_env_error(missing: list[str], *, hint: str = "") -> InternalError:
    """Build the error raised when required environment variables are absent."""

    message = "Variáveis de ambiente faltando: " + ", ".join(missing) + "."
    if hint:
        message = f"{message} {hint}"
    return InternalError(message)
