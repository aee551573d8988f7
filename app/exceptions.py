"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a user-facing message;
``main.create_app`` registers a single handler that turns any ``AppError``
into ``{"message": ...}``.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Erro interno no servidor."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Dados inválidos."


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token inválido."


class Expired(Unauthorized):
    default_message = "Token expirado."


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Registro não encontrado"


class ConflictError(AppError):
    # Duplicate CPF is reported as a client error, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "CPF já está em uso"


class InternalError(AppError):
    pass


__all__ = [
    "AppError",
    "ValidationError",
    "Unauthorized",
    "Expired",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
