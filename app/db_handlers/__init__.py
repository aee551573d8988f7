from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.observacao import ObservacaoDBHandler
from app.db_handlers.usuario import UsuarioDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "UsuarioDBHandler",
    "ObservacaoDBHandler",
]
