"""SQLAlchemy ORM model for user profiles."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.infrastructure.database.base import Base


class ProfileModel(Base):
    """ORM model — maps to the 'perfiles' table."""

    __tablename__ = "perfiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    nombre: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ejecutivo_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("ejecutivos.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<ProfileModel(id={self.id}, ejecutivo_id={self.ejecutivo_id})>"
