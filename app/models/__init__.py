"""
Database models for the Usuarios API.

Architecture: Usuario → Observacao (one-to-many).
"""

from app.models.observacao import Observacao
from app.models.usuario import Usuario

__all__ = [
    "Usuario",
    "Observacao",
]
