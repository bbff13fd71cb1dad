from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Rayon(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "rayon"

    nama_rayon: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    keluargas = relationship("Keluarga", back_populates="rayon")
