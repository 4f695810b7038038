"""Initial schema: notes, tags, sources and their link tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates `notes`, `tags`, `sources`, `notes_tags` and `notes_sources`.
How:   Integer identity keys; link tables use composite primary keys with
       ON DELETE CASCADE on both sides.

Rollback: downgrade() drops every table (destructive: all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables. See noteshelf/models/ for column documentation."""
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "modified_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_notes"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(25), nullable=False),
        # Palette reference; the colours table is not managed by this service
        sa.Column("color_id", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_tags"),
        sa.UniqueConstraint("name", name="uq_tags_name"),
    )

    op.create_table(
        "sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(1024), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("last_checked_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_sources"),
    )

    op.create_table(
        "notes_tags",
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("tag_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "tag_id", name="pk_notes_tags"),
    )

    op.create_table(
        "notes_sources",
        sa.Column("note_id", sa.Integer(), nullable=False),
        sa.Column("source_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["source_id"], ["sources.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "source_id", name="pk_notes_sources"),
    )

    # Reverse lookups: "which notes carry this tag / cite this source"
    op.create_index("idx_notes_tags_tag_id", "notes_tags", ["tag_id"])
    op.create_index("idx_notes_sources_source_id", "notes_sources", ["source_id"])


def downgrade() -> None:
    """Drop link tables first, then the tables they reference."""
    op.drop_index("idx_notes_sources_source_id", table_name="notes_sources")
    op.drop_index("idx_notes_tags_tag_id", table_name="notes_tags")
    op.drop_table("notes_sources")
    op.drop_table("notes_tags")
    op.drop_table("sources")
    op.drop_table("tags")
    op.drop_table("notes")
