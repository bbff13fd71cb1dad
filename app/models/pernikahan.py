from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Pernikahan(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "pernikahan"

    id_klasis: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    tanggal: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # Both spouses point here through jemaat.id_pernikahan.
    jemaats = relationship("Jemaat", back_populates="pernikahan")
