"""SQLAlchemy ORM model for the executive roster."""

from sqlalchemy import Boolean, Float, Index, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.infrastructure.database.base import Base


class ExecutiveModel(Base):
    """ORM model — maps to the 'ejecutivos' table (one row per agent per period)."""

    __tablename__ = "ejecutivos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    tipo: Mapped[str | None] = mapped_column(String(50), nullable=True)
    meta: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    activo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    mes: Mapped[int] = mapped_column(Integer, nullable=False)
    anio: Mapped[int] = mapped_column(Integer, nullable=False)
    extra: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("ix_ejecutivos_periodo", "anio", "mes"),
        Index("ix_ejecutivos_nombre", "nombre"),
    )

    def __repr__(self) -> str:
        return f"<ExecutiveModel(id={self.id}, nombre='{self.nombre}', periodo={self.anio}-{self.mes})>"
