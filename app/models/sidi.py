from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Sidi(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "sidi"

    id_jemaat: Mapped[str] = mapped_column(String(36), ForeignKey("jemaat.id"), nullable=False, index=True)
    id_klasis: Mapped[str | None] = mapped_column(String(36), nullable=True)
    tanggal: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    jemaat = relationship("Jemaat")
