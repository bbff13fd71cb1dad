"""add pernikahan and jemaat.id_pernikahan

Revision ID: 0002_add_pernikahan
Revises: 0001_init
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_add_pernikahan"
down_revision = "0001_init"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "pernikahan",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("id_klasis", sa.String(length=36), nullable=True),
        sa.Column("tanggal", sa.Date(), nullable=False),
    )
    op.create_index("ix_pernikahan_id_klasis", "pernikahan", ["id_klasis"])
    op.create_index("ix_pernikahan_tanggal", "pernikahan", ["tanggal"])

    with op.batch_alter_table("jemaat") as batch:
        batch.add_column(sa.Column("id_pernikahan", sa.String(length=36), nullable=True))
        batch.create_foreign_key("fk_jemaat_id_pernikahan", "pernikahan", ["id_pernikahan"], ["id"])
        batch.create_index("ix_jemaat_id_pernikahan", ["id_pernikahan"])


def downgrade():
    with op.batch_alter_table("jemaat") as batch:
        batch.drop_index("ix_jemaat_id_pernikahan")
        batch.drop_constraint("fk_jemaat_id_pernikahan", type_="foreignkey")
        batch.drop_column("id_pernikahan")
    op.drop_index("ix_pernikahan_tanggal", table_name="pernikahan")
    op.drop_index("ix_pernikahan_id_klasis", table_name="pernikahan")
    op.drop_table("pernikahan")
