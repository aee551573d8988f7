from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.exceptions import NotFoundError
from app.models.observacao import Observacao
from app.models.usuario import Usuario
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.observacao")

USUARIO_NAO_ENCONTRADO = "Usuário não encontrado"
OBSERVACAO_NAO_ENCONTRADA = "Observação não encontrada"


class ObservacaoDBHandler(BaseDBHandler[Observacao]):
    """Notes attached to a Usuario.

    A note only references its owner; the owner's ``observacoes`` is read
    back from these rows, so note writes never update the Usuario row.
    """

    def __init__(self):
        super().__init__(Observacao)

    async def _get_owner_id(self, cpf: str, db: AsyncSession) -> str:
        result = await db.execute(select(Usuario.id).where(Usuario.cpf == cpf))
        usuario_id = result.scalars().first()
        if usuario_id is None:
            raise NotFoundError(USUARIO_NAO_ENCONTRADO)
        return usuario_id

    @check_local_db
    async def list_by_owner(
        self, usuario_id: str, *, db: AsyncSession = None
    ) -> list[Observacao]:
        """Notes of one owner in insertion order."""
        return await self.get_multi_by_attributes(
            db=db,
            usuario_id=usuario_id,
            order_by=[Observacao.created_at, Observacao.id],
        )

    @check_local_db
    async def list_by_cpf(self, cpf: str, *, db: AsyncSession = None) -> list[Observacao]:
        usuario_id = await self._get_owner_id(cpf, db)
        return await self.list_by_owner(usuario_id, db=db)

    @check_local_db
    async def create_for_cpf(
        self,
        cpf: str,
        texto: str,
        data: datetime | None = None,
        complemento: str | None = None,
        criado_por: str | None = None,
        *,
        db: AsyncSession = None,
    ) -> Observacao:
        """Insert a note for the Usuario with ``cpf``."""
        usuario_id = await self._get_owner_id(cpf, db)

        obj_dict = {
            "texto": texto,
            "complemento": complemento,
            "usuario_id": usuario_id,
            "criado_por": criado_por,
        }
        if data is not None:
            obj_dict["data"] = data

        observacao = await self.create(obj_dict, db=db)
        logger.info(f"Created observacao {observacao.id} for usuario {usuario_id}")
        return observacao

    @check_local_db
    async def delete_by_id(
        self, observacao_id: str, *, db: AsyncSession = None
    ) -> Observacao:
        """Delete a note by id. A note whose owner is already gone is still removed."""
        observacao = await self.remove(observacao_id, db=db)
        if observacao is None:
            raise NotFoundError(OBSERVACAO_NAO_ENCONTRADA)

        dono = await db.execute(
            select(Usuario.id).where(Usuario.id == observacao.usuario_id)
        )
        if dono.scalars().first() is None:
            logger.warning(
                f"Owner {observacao.usuario_id} of observacao {observacao_id} no longer exists"
            )

        logger.info(f"Deleted observacao {observacao_id}")
        return observacao

    @check_local_db
    async def delete_all_by_owner(
        self, usuario_id: str, *, db: AsyncSession = None
    ) -> int:
        """Bulk delete used by the Usuario cascade. Returns the number of rows removed."""
        result = await db.execute(
            delete(Observacao).where(Observacao.usuario_id == usuario_id)
        )
        return result.rowcount or 0
