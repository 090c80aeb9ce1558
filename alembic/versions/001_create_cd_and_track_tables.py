"""Create cd and track tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create cd and track tables."""
    op.create_table(
        "cd",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("catalog_code", sa.String(16), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("genre", sa.String(12), nullable=True),
        sa.Column("price", sa.Numeric(8, 2), nullable=False),
        sa.Column("duration", sa.Numeric(5, 2), nullable=True),
        sa.Column("available", sa.Boolean(), nullable=False),
        sa.Column("performer", sa.String(40), nullable=True),
        sa.Column("title", sa.String(40), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("catalog_code"),
    )
    op.create_index(op.f("ix_cd_id"), "cd", ["id"], unique=False)
    op.create_index(op.f("ix_cd_title"), "cd", ["title"], unique=False)

    op.create_table(
        "track",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("cd_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(32), nullable=False),
        sa.Column("duration", sa.Numeric(5, 2), nullable=False),
        sa.ForeignKeyConstraint(["cd_id"], ["cd.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("title"),
    )
    op.create_index(op.f("ix_track_id"), "track", ["id"], unique=False)
    op.create_index(op.f("ix_track_cd_id"), "track", ["cd_id"], unique=False)


def downgrade() -> None:
    """Drop cd and track tables."""
    op.drop_index(op.f("ix_track_cd_id"), table_name="track")
    op.drop_index(op.f("ix_track_id"), table_name="track")
    op.drop_table("track")
    op.drop_index(op.f("ix_cd_title"), table_name="cd")
    op.drop_index(op.f("ix_cd_id"), table_name="cd")
    op.drop_table("cd")
