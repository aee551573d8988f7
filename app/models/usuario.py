"""
Usuario model: a person identified by CPF.

``observacoes`` is read from the Observacao rows that point at the Usuario,
ordered by creation, so concurrent note writes never have to update the
Usuario row itself. Deleting a Usuario removes all its Observacoes.
"""

from sqlalchemy import Column, Index, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, StringIDMixin, TimestampMixin
from app.models.observacao import Observacao


class Usuario(Base, StringIDMixin, TimestampMixin):
    __tablename__ = "usuarios"
    __table_args__ = (Index("ix_usuarios_cpf", "cpf", unique=True),)

    nome = Column(String(255), nullable=False, comment="Display name")

    cpf = Column(
        String(32),
        nullable=False,
        comment="Brazilian taxpayer id, unique natural key for lookups",
    )

    relatorio = Column(
        Text,
        nullable=False,
        default="",
        comment="Free-text report, replaced wholesale on update",
    )

    # Read-only view; notes are written and removed by the Observacao handler
    observacoes = relationship(
        Observacao,
        order_by=[Observacao.created_at, Observacao.id],
        lazy="selectin",
        viewonly=True,
        doc="Owned Observacoes, in creation order",
    )

    def __repr__(self):
        return f"<Usuario(id={self.id}, cpf='{self.cpf}')>"
