"""initial catalog schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "admin",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=80), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.UniqueConstraint("username", name="uq_admin_username"),
    )
    op.create_index("ix_admin_username", "admin", ["username"], unique=False)

    op.create_table(
        "platform",
        sa.Column("platform_id", sa.Integer(), primary_key=True),
        sa.Column("platform_name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=500), nullable=True),
        sa.Column("cover", sa.String(length=500), nullable=True),
        sa.Column("thumbnail", sa.String(length=500), nullable=True),
    )

    op.create_table(
        "category",
        sa.Column("cat_id", sa.Integer(), primary_key=True),
        sa.Column("platform_id", sa.Integer(), sa.ForeignKey("platform.platform_id"), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("cat_name", sa.String(length=120), nullable=False),
        sa.Column("cat_description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=500), nullable=True),
        sa.Column("cat_thumb", sa.String(length=500), nullable=True),
        sa.Column("cover", sa.String(length=500), nullable=True),
    )

    op.create_table(
        "upload",
        sa.Column("upload_id", sa.Integer(), primary_key=True),
        sa.Column("upload_date", sa.Date(), nullable=False),
        sa.Column("path", sa.String(length=500), nullable=False),
    )

    op.create_table(
        "software",
        sa.Column("upload_id", sa.Integer(), sa.ForeignKey("upload.upload_id"), primary_key=True),
        sa.Column("platform_id", sa.Integer(), sa.ForeignKey("platform.platform_id"), nullable=False),
        sa.Column("cat_id", sa.Integer(), sa.ForeignKey("category.cat_id"), nullable=False),
        sa.Column("package_name", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("vendor", sa.String(length=255), nullable=False),
        sa.Column("version", sa.String(length=64), nullable=False),
        sa.Column("release_date", sa.Date(), nullable=False),
    )

    op.create_table(
        "soft_thumb",
        sa.Column("thumb_id", sa.Integer(), primary_key=True),
        sa.Column("link", sa.String(length=500), nullable=False),
        sa.Column(
            "software_id",
            sa.Integer(),
            sa.ForeignKey("software.upload_id", ondelete="CASCADE"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("soft_thumb")
    op.drop_table("software")
    op.drop_table("upload")
    op.drop_table("category")
    op.drop_table("platform")
    op.drop_index("ix_admin_username", table_name="admin")
    op.drop_table("admin")
