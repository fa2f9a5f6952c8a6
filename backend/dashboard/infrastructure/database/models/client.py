"""SQLAlchemy ORM model for the client roster."""

from sqlalchemy import Float, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.infrastructure.database.base import Base


class ClientModel(Base):
    """ORM model — maps to the 'clientes' table."""

    __tablename__ = "clientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mes_registro: Mapped[int] = mapped_column(Integer, nullable=False)
    anio_registro: Mapped[int] = mapped_column(Integer, nullable=False)
    ejecutivo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estatus: Mapped[str | None] = mapped_column(String(100), nullable=True)
    producto: Mapped[str | None] = mapped_column(String(255), nullable=True)
    monto: Mapped[float | None] = mapped_column(Float, nullable=True)
    fecha_inicio: Mapped[str | None] = mapped_column(String(10), nullable=True)
    fecha_final: Mapped[str | None] = mapped_column(String(10), nullable=True)
    actualizacion: Mapped[str | None] = mapped_column(Text, nullable=True)
    extra: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("ix_clientes_periodo", "anio_registro", "mes_registro"),
        Index("ix_clientes_ejecutivo", "ejecutivo"),
    )

    def __repr__(self) -> str:
        return (
            f"<ClientModel(id={self.id}, "
            f"periodo={self.anio_registro}-{self.mes_registro}, estatus='{self.estatus}')>"
        )
