# Models package init
"""
Importing this package registers every table on Base.metadata.
Alembic's env.py and Database.create_all() rely on that.
"""

from noteshelf.models.associations import NoteSource, NoteTag
from noteshelf.models.note import (
    NOTE_CONTENT_MAX_LENGTH,
    NOTE_TITLE_MAX_LENGTH,
    NOTE_TITLE_MIN_LENGTH,
    Note,
)
from noteshelf.models.source import Source
from noteshelf.models.tag import TAG_NAME_MAX_LENGTH, TAG_NAME_MIN_LENGTH, Tag

__all__ = [
    "Note",
    "Tag",
    "Source",
    "NoteTag",
    "NoteSource",
    "NOTE_TITLE_MIN_LENGTH",
    "NOTE_TITLE_MAX_LENGTH",
    "NOTE_CONTENT_MAX_LENGTH",
    "TAG_NAME_MIN_LENGTH",
    "TAG_NAME_MAX_LENGTH",
]
