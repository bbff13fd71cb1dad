from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Keluarga(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "keluarga"

    id_alamat: Mapped[str | None] = mapped_column(String(36), ForeignKey("alamat.id"), nullable=True, index=True)
    id_rayon: Mapped[str | None] = mapped_column(String(36), ForeignKey("rayon.id"), nullable=True, index=True)
    id_status_keluarga: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    id_status_kepemilikan_rumah: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_keadaan_rumah: Mapped[str | None] = mapped_column(String(36), nullable=True)
    no_bagungan: Mapped[int | None] = mapped_column(Integer, nullable=True)
    no_kk: Mapped[str | None] = mapped_column(String(30), nullable=True, unique=True)

    alamat = relationship("Alamat")
    rayon = relationship("Rayon", back_populates="keluargas")
    jemaats = relationship("Jemaat", back_populates="keluarga")
