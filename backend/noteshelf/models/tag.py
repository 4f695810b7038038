"""
NoteShelf Backend — Tag SQLAlchemy Model
==========================================

What:  ORM model for the `tags` table.
Why:   Tag names are unique across all tags. The UNIQUE constraint lives in
       the store, which is what serialises two concurrent creates of the same
       name; TagService only translates the resulting violation.
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from noteshelf.database import Base

TAG_NAME_MIN_LENGTH = 1
TAG_NAME_MAX_LENGTH = 25


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(TAG_NAME_MAX_LENGTH),
        nullable=False,
        unique=True,
    )

    # Reference to a colour palette entry. There is no colours table yet, so
    # this is a plain nullable column without a foreign key.
    color_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=None)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
