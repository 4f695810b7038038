"""
NoteShelf Backend — Source SQLAlchemy Model
=============================================

What:  ORM model for the `sources` table: external references (URLs) a note
       was written from.
Note:  Schema only for now. No service or route reads or writes sources;
       the table exists so notes_sources links have something to point at.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from noteshelf.database import Base
from noteshelf.models.note import utcnow


class Source(Base):
    __tablename__ = "sources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    # When the URL was last verified to still resolve
    last_checked_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Source(id={self.id}, url='{self.url}')>"
