from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class Alamat(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "alamat"

    id_kelurahan: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    rt: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rw: Mapped[int | None] = mapped_column(Integer, nullable=True)
    jalan: Mapped[str | None] = mapped_column(String(200), nullable=True)
