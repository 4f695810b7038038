"""
NoteShelf Backend — Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - Integer primary key generated by the store (ids are positive integers)
    - title: bounded by NOTE_TITLE_MAX_LENGTH, enforced by the validator
      before any insert and mirrored in the column width
    - content: TEXT, bounded by NOTE_CONTENT_MAX_LENGTH in the validator
    - created_at / modified_at: UTC with timezone
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from noteshelf.database import Base

# ── Field constraints ─────────────────────────────────────────────────────
NOTE_TITLE_MIN_LENGTH = 1
NOTE_TITLE_MAX_LENGTH = 100
NOTE_CONTENT_MAX_LENGTH = 10000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A user's note.

    Lifecycle:
        1. Created through NoteService.create_note (validated title/content)
        2. Replaced wholesale by NoteService.update_note, which refreshes modified_at
        3. Deleted permanently by NoteService.delete_note / delete_notes
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(NOTE_TITLE_MAX_LENGTH), nullable=False)

    # Empty string is a valid body; absent is not (the validator rejects None)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Written by the service on every update; must only ever move forward
    modified_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', modified_at='{self.modified_at}')>"
