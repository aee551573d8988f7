from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class StrictRequest(BaseModel):
    """Request bodies reject fields they don't declare."""

    model_config = ConfigDict(extra="forbid")


class LoginRequest(StrictRequest):
    login: str = Field(..., min_length=1, description="Account login")
    senha: str = Field(..., min_length=1, description="Account password")


class Token(BaseModel):
    token: str = Field(..., description="JWT access token, valid for one hour")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class CurrentLogin(BaseModel):
    """Identity carried by a verified access token."""

    login: str | None = None
    role: str | None = None


# ===== Usuario =====


class UsuarioCreate(StrictRequest):
    nome: str = Field(..., min_length=1, max_length=255)
    cpf: str = Field(..., min_length=1, max_length=32)


class UsuarioUpdate(StrictRequest):
    nome: str | None = Field(default=None, min_length=1, max_length=255)
    cpf: str | None = Field(default=None, min_length=1, max_length=32)

    @model_validator(mode="after")
    def require_some_field(self) -> "UsuarioUpdate":
        if self.nome is None and self.cpf is None:
            raise ValueError("Informe ao menos um dos campos: nome, cpf")
        return self


class RelatorioUpdate(StrictRequest):
    relatorio: str = Field(..., description="Replaces the whole report")


class UsuarioResponse(BaseModel):
    id: str
    nome: str
    cpf: str
    observacoes: list[str] = Field(default_factory=list)
    relatorio: str = ""

    model_config = ConfigDict(from_attributes=True)

    @field_validator("observacoes", mode="before")
    @classmethod
    def observacao_ids(cls, value):
        """Accept loaded Observacao rows as well as plain ids."""
        return [getattr(item, "id", item) for item in value or []]


# ===== Observacao =====


class ObservacaoCreate(StrictRequest):
    texto: str = Field(..., min_length=1)
    data: datetime | None = Field(
        default=None, description="Defaults to the creation time"
    )
    complemento: str | None = None


class ObservacaoResponse(BaseModel):
    id: str
    texto: str
    data: datetime
    complemento: str | None = None
    usuario_id: str = Field(
        ...,
        validation_alias=AliasChoices("usuario_id", "usuarioId"),
        serialization_alias="usuarioId",
    )
    criado_por: str | None = Field(
        default=None,
        validation_alias=AliasChoices("criado_por", "criadoPor"),
        serialization_alias="criadoPor",
    )

    model_config = ConfigDict(from_attributes=True)
