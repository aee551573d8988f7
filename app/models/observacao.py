"""Observacao model: a free-text note attached to one Usuario."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text

from app.models.base import Base, StringIDMixin, TimestampMixin, utcnow


class Observacao(Base, StringIDMixin, TimestampMixin):
    __tablename__ = "observacoes"
    __table_args__ = (Index("ix_observacoes_usuario_id", "usuario_id"),)

    texto = Column(Text, nullable=False, comment="Note body")

    data = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="Note date; caller supplied or creation time",
    )

    complemento = Column(Text, nullable=True, comment="Optional supplemental text")

    usuario_id = Column(
        String(32),
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning Usuario",
    )

    criado_por = Column(
        String(255),
        nullable=True,
        comment="Login of the account that created the note",
    )

    def __repr__(self):
        return f"<Observacao(id={self.id}, usuario_id={self.usuario_id})>"
