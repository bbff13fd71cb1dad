from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Majelis(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "majelis"

    nama_lengkap: Mapped[str] = mapped_column(String(200), nullable=False)
    id_rayon: Mapped[str | None] = mapped_column(String(36), ForeignKey("rayon.id"), nullable=True, index=True)

    rayon = relationship("Rayon")
