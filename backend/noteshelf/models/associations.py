"""
NoteShelf Backend — Association Tables
========================================

What:  Many-to-many link rows between notes and tags / notes and sources.
How:   A link is identified only by its pair of foreign ids (composite
       primary key), so inserting the same pair twice is a uniqueness
       violation, reported to clients as DuplicateEntryError.
       ON DELETE CASCADE removes links together with either side.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from noteshelf.database import Base


class NoteTag(Base):
    __tablename__ = "notes_tags"

    note_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )


class NoteSource(Base):
    __tablename__ = "notes_sources"

    note_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True
    )
    source_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sources.id", ondelete="CASCADE"), primary_key=True
    )
