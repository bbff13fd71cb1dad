"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _id_and_timestamps():
    return [
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "rayon",
        *_id_and_timestamps(),
        sa.Column("nama_rayon", sa.String(length=100), nullable=False, unique=True),
    )

    op.create_table(
        "alamat",
        *_id_and_timestamps(),
        sa.Column("id_kelurahan", sa.String(length=36), nullable=True),
        sa.Column("rt", sa.Integer(), nullable=True),
        sa.Column("rw", sa.Integer(), nullable=True),
        sa.Column("jalan", sa.String(length=200), nullable=True),
    )
    op.create_index("ix_alamat_id_kelurahan", "alamat", ["id_kelurahan"])

    op.create_table(
        "keluarga",
        *_id_and_timestamps(),
        sa.Column("id_alamat", sa.String(length=36), sa.ForeignKey("alamat.id"), nullable=True),
        sa.Column("id_rayon", sa.String(length=36), sa.ForeignKey("rayon.id"), nullable=True),
        sa.Column("id_status_keluarga", sa.String(length=36), nullable=True),
        sa.Column("id_status_kepemilikan_rumah", sa.String(length=36), nullable=True),
        sa.Column("id_keadaan_rumah", sa.String(length=36), nullable=True),
        sa.Column("no_bagungan", sa.Integer(), nullable=True),
        sa.Column("no_kk", sa.String(length=30), nullable=True, unique=True),
    )
    op.create_index("ix_keluarga_id_alamat", "keluarga", ["id_alamat"])
    op.create_index("ix_keluarga_id_rayon", "keluarga", ["id_rayon"])
    op.create_index("ix_keluarga_id_status_keluarga", "keluarga", ["id_status_keluarga"])

    op.create_table(
        "jemaat",
        *_id_and_timestamps(),
        sa.Column("id_keluarga", sa.String(length=36), sa.ForeignKey("keluarga.id"), nullable=True),
        sa.Column("id_status_dalam_keluarga", sa.String(length=36), nullable=True),
        sa.Column("id_suku", sa.String(length=36), nullable=True),
        sa.Column("id_pendidikan", sa.String(length=36), nullable=True),
        sa.Column("id_pekerjaan", sa.String(length=36), nullable=True),
        sa.Column("id_pendapatan", sa.String(length=36), nullable=True),
        sa.Column("id_jaminan_kesehatan", sa.String(length=36), nullable=True),
        sa.Column("nama", sa.String(length=200), nullable=False),
        sa.Column("jenis_kelamin", sa.Boolean(), nullable=False),
        sa.Column("tanggal_lahir", sa.Date(), nullable=True),
        sa.Column("golongan_darah", sa.String(length=3), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="AKTIF"),
    )
    op.create_index("ix_jemaat_id_keluarga", "jemaat", ["id_keluarga"])
    op.create_index("ix_jemaat_nama", "jemaat", ["nama"])
    op.create_index("ix_jemaat_tanggal_lahir", "jemaat", ["tanggal_lahir"])

    op.create_table(
        "majelis",
        *_id_and_timestamps(),
        sa.Column("nama_lengkap", sa.String(length=200), nullable=False),
        sa.Column("id_rayon", sa.String(length=36), sa.ForeignKey("rayon.id"), nullable=True),
    )
    op.create_index("ix_majelis_id_rayon", "majelis", ["id_rayon"])

    op.create_table(
        "users",
        *_id_and_timestamps(),
        sa.Column("username", sa.String(length=100), nullable=False, unique=True),
        sa.Column("email", sa.String(length=200), nullable=True, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="JEMAAT"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("id_jemaat", sa.String(length=36), sa.ForeignKey("jemaat.id"), nullable=True, unique=True),
        sa.Column("id_majelis", sa.String(length=36), sa.ForeignKey("majelis.id"), nullable=True, unique=True),
    )

    for table in ("baptis", "sidi"):
        op.create_table(
            table,
            *_id_and_timestamps(),
            sa.Column("id_jemaat", sa.String(length=36), sa.ForeignKey("jemaat.id"), nullable=False),
            sa.Column("id_klasis", sa.String(length=36), nullable=True),
            sa.Column("tanggal", sa.Date(), nullable=False),
        )
        op.create_index(f"ix_{table}_id_jemaat", table, ["id_jemaat"])
        op.create_index(f"ix_{table}_tanggal", table, ["tanggal"])


def downgrade():
    op.drop_table("sidi")
    op.drop_table("baptis")
    op.drop_table("users")
    op.drop_table("majelis")
    op.drop_table("jemaat")
    op.drop_table("keluarga")
    op.drop_table("alamat")
    op.drop_table("rayon")
