from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.observacao import USUARIO_NAO_ENCONTRADO, ObservacaoDBHandler
from app.exceptions import ConflictError, NotFoundError
from app.models.usuario import Usuario
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.usuario")

CPF_EM_USO = "CPF já está em uso"


class UsuarioDBHandler(BaseDBHandler[Usuario]):
    def __init__(self):
        super().__init__(Usuario)

    async def _reload(self, usuario: Usuario, db: AsyncSession) -> Usuario:
        """Re-read the row and its current notes after a write in this session."""
        result = await db.execute(
            select(Usuario)
            .where(Usuario.id == usuario.id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().one()

    @check_local_db
    async def list_all(self, *, db: AsyncSession = None) -> list[Usuario]:
        return await self.get_multi_by_attributes(
            db=db, order_by=[Usuario.created_at, Usuario.id]
        )

    @check_local_db
    async def get_by_cpf(self, cpf: str, *, db: AsyncSession = None) -> Usuario:
        usuario = await self.get_by_attributes(db=db, cpf=cpf)
        if usuario is None:
            raise NotFoundError(USUARIO_NAO_ENCONTRADO)
        return usuario

    @check_local_db
    async def create_usuario(
        self, nome: str, cpf: str, *, db: AsyncSession = None
    ) -> Usuario:
        """Insert a Usuario; the unique index on cpf rejects duplicates."""
        try:
            usuario = await self.create(
                {"nome": nome, "cpf": cpf, "relatorio": ""}, db=db
            )
        except IntegrityError as e:
            raise ConflictError(f"CPF {cpf} já cadastrado") from e
        logger.info(f"Created usuario {usuario.id}")
        return await self._reload(usuario, db)

    @check_local_db
    async def update_by_cpf(
        self, cpf: str, update_data: dict[str, Any], *, db: AsyncSession = None
    ) -> Usuario:
        """Apply ``nome``/``cpf`` changes. A new cpf held by another record is a conflict."""
        usuario = await self.get_by_cpf(cpf, db=db)

        novo_cpf = update_data.get("cpf")
        if novo_cpf is not None and novo_cpf != usuario.cpf:
            existente = await self.get_by_attributes(db=db, cpf=novo_cpf)
            if existente is not None and existente.id != usuario.id:
                raise ConflictError(CPF_EM_USO)

        try:
            usuario = await self.update(usuario, update_data, db=db)
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same cpf
            raise ConflictError(CPF_EM_USO) from e
        logger.info(f"Updated usuario {usuario.id}: {sorted(update_data)}")
        return await self._reload(usuario, db)

    @check_local_db
    async def update_relatorio(
        self, cpf: str, relatorio: str, *, db: AsyncSession = None
    ) -> Usuario:
        """Overwrite the report; nothing is written when the Usuario is missing."""
        usuario = await self.get_by_cpf(cpf, db=db)
        usuario = await self.update(usuario, {"relatorio": relatorio}, db=db)
        return await self._reload(usuario, db)

    @check_local_db
    async def delete_by_cpf(self, cpf: str, *, db: AsyncSession = None) -> Usuario:
        """Delete a Usuario and every Observacao it owns."""
        usuario = await self.get_by_cpf(cpf, db=db)

        removed = await ObservacaoDBHandler().delete_all_by_owner(usuario.id, db=db)
        await db.delete(usuario)
        await db.flush()

        logger.info(f"Deleted usuario {usuario.id} and {removed} observacoes")
        return usuario
