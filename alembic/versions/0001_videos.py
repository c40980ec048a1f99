"""Create videos table

Revision ID: 0001_videos
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_videos"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "videos",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("s3_key", sa.String(length=255), nullable=False, unique=True),
        sa.Column("thumbnail_s3_key", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index("idx_videos_created_at", "videos", [sa.text("created_at DESC")])
    op.create_index("idx_videos_s3_key", "videos", ["s3_key"])


def downgrade() -> None:
    op.drop_index("idx_videos_s3_key", table_name="videos")
    op.drop_index("idx_videos_created_at", table_name="videos")
    op.drop_table("videos")
