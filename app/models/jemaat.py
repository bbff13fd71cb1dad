from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Jemaat(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "jemaat"

    id_keluarga: Mapped[str | None] = mapped_column(String(36), ForeignKey("keluarga.id"), nullable=True, index=True)
    id_pernikahan: Mapped[str | None] = mapped_column(String(36), ForeignKey("pernikahan.id"), nullable=True, index=True)
    id_status_dalam_keluarga: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_suku: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_pendidikan: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_pekerjaan: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_pendapatan: Mapped[str | None] = mapped_column(String(36), nullable=True)
    id_jaminan_kesehatan: Mapped[str | None] = mapped_column(String(36), nullable=True)
    nama: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    jenis_kelamin: Mapped[bool] = mapped_column(Boolean, nullable=False)  # True = laki-laki
    tanggal_lahir: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    golongan_darah: Mapped[str | None] = mapped_column(String(3), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="AKTIF")  # AKTIF|TIDAK_AKTIF|KELUAR

    keluarga = relationship("Keluarga", back_populates="jemaats")
    user = relationship("User", back_populates="jemaat", uselist=False)
    pernikahan = relationship("Pernikahan", back_populates="jemaats")
