from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base
from app.models.common import StringIdMixin, TimestampMixin


class User(Base, StringIdMixin, TimestampMixin):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str | None] = mapped_column(String(200), unique=True, nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="JEMAAT")  # ADMIN|PENDETA|MAJELIS|EMPLOYEE|JEMAAT
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    id_jemaat: Mapped[str | None] = mapped_column(String(36), ForeignKey("jemaat.id"), nullable=True, unique=True)
    id_majelis: Mapped[str | None] = mapped_column(String(36), ForeignKey("majelis.id"), nullable=True, unique=True)

    jemaat = relationship("Jemaat", back_populates="user")
    majelis = relationship("Majelis")
