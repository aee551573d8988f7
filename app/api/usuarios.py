"""
Usuario API Routes - CPF-keyed user records and their observacoes.

Every route here requires a valid bearer token. Repository errors
(``NotFoundError``, ``ConflictError``) propagate to the application's
``AppError`` handler, which renders them as ``{"message": ...}``.
"""

from fastapi import APIRouter, Depends, status

from app.db_handlers import ObservacaoDBHandler, UsuarioDBHandler
from app.dependencies.auth import get_current_login
from app.schemas import (
    CurrentLogin,
    MessageResponse,
    ObservacaoCreate,
    ObservacaoResponse,
    RelatorioUpdate,
    UsuarioCreate,
    UsuarioResponse,
    UsuarioUpdate,
)
from app.utils.logger import setup_logger

logger = setup_logger("api.usuarios")

router = APIRouter(
    prefix="/usuarios",
    tags=["Usuarios"],
    dependencies=[Depends(get_current_login)],
)


@router.get("", response_model=list[UsuarioResponse])
async def list_usuarios(usuario_db_handler: UsuarioDBHandler = Depends()):
    """List every Usuario, without pagination."""
    usuarios = await usuario_db_handler.list_all()
    return [UsuarioResponse.model_validate(u) for u in usuarios]


@router.post(
    "", response_model=UsuarioResponse, status_code=status.HTTP_201_CREATED
)
async def create_usuario(
    usuario_data: UsuarioCreate,
    usuario_db_handler: UsuarioDBHandler = Depends(),
):
    usuario = await usuario_db_handler.create_usuario(
        usuario_data.nome, usuario_data.cpf
    )
    return UsuarioResponse.model_validate(usuario)


# Must stay ahead of PUT /cpf/{cpf}: /usuarios/cpf/relatorio is the report of cpf "cpf"
@router.put("/{cpf}/relatorio", response_model=UsuarioResponse)
async def update_relatorio(
    cpf: str,
    relatorio_data: RelatorioUpdate,
    usuario_db_handler: UsuarioDBHandler = Depends(),
):
    usuario = await usuario_db_handler.update_relatorio(cpf, relatorio_data.relatorio)
    return UsuarioResponse.model_validate(usuario)


@router.get("/cpf/{cpf}", response_model=UsuarioResponse)
async def get_usuario(cpf: str, usuario_db_handler: UsuarioDBHandler = Depends()):
    usuario = await usuario_db_handler.get_by_cpf(cpf)
    return UsuarioResponse.model_validate(usuario)


@router.put("/cpf/{cpf}", response_model=UsuarioResponse)
async def update_usuario(
    cpf: str,
    usuario_data: UsuarioUpdate,
    usuario_db_handler: UsuarioDBHandler = Depends(),
):
    """
    Update nome and/or cpf of the Usuario currently holding ``cpf``.

    Moving to a cpf that belongs to another Usuario is rejected with 400;
    re-sending the Usuario's own cpf is allowed.
    """
    usuario = await usuario_db_handler.update_by_cpf(
        cpf, usuario_data.model_dump(exclude_unset=True, exclude_none=True)
    )
    return UsuarioResponse.model_validate(usuario)


@router.delete("/cpf/{cpf}", response_model=MessageResponse)
async def delete_usuario(cpf: str, usuario_db_handler: UsuarioDBHandler = Depends()):
    """Delete the Usuario and, in the same transaction, all of its observacoes."""
    await usuario_db_handler.delete_by_cpf(cpf)
    return MessageResponse(message="Usuário e observações deletados com sucesso")


@router.post(
    "/cpf/{cpf}/observacoes",
    response_model=ObservacaoResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_observacao(
    cpf: str,
    observacao_data: ObservacaoCreate,
    current_login: CurrentLogin = Depends(get_current_login),
    observacao_db_handler: ObservacaoDBHandler = Depends(),
):
    """
    Attach a note to the Usuario with ``cpf``.

    The note records the caller's login as ``criadoPor`` and shows up at
    the end of the owner's ``observacoes``.
    """
    observacao = await observacao_db_handler.create_for_cpf(
        cpf,
        observacao_data.texto,
        data=observacao_data.data,
        complemento=observacao_data.complemento,
        criado_por=current_login.login,
    )
    return ObservacaoResponse.model_validate(observacao)


@router.get("/cpf/{cpf}/observacoes", response_model=list[ObservacaoResponse])
async def list_observacoes(
    cpf: str, observacao_db_handler: ObservacaoDBHandler = Depends()
):
    observacoes = await observacao_db_handler.list_by_cpf(cpf)
    return [ObservacaoResponse.model_validate(o) for o in observacoes]


@router.delete("/cpf/{cpf}/observacoes/{observacao_id}", response_model=MessageResponse)
async def delete_observacao(
    cpf: str,
    observacao_id: str,
    observacao_db_handler: ObservacaoDBHandler = Depends(),
):
    # The note is addressed by id alone; cpf only scopes the URL
    await observacao_db_handler.delete_by_id(observacao_id)
    logger.info(f"Observacao {observacao_id} removed via usuario cpf {cpf}")
    return MessageResponse(message="Observação deletada com sucesso")
