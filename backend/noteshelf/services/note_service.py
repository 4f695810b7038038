"""
NoteShelf Backend — Note Service
==================================

What:  Business logic for notes and their tag links.
Why:   Keeps validation, persistence and error translation out of the
       route handlers, which only map outcomes to HTTP responses.
How:   Every operation validates its inputs first, then opens exactly one
       `database.session()` for the store work. The session is released on
       every exit path by the context manager, including when a NotFoundError
       or a store failure is raised inside it.
Who:   Constructed per request by noteshelf.dependencies.get_note_service.

Operation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────────┐
    │  Route   │───▶│  Validate   │───▶│  session()   │───▶│ NoteResponse │
    │          │    │ (validators)│    │  query/flush │    │ or taxonomy  │
    └──────────┘    └─────────────┘    └──────────────┘    │    error     │
                                                           └──────────────┘

Error Handling Strategy:
    - Validation failures raise before any session is acquired
    - "No such row" becomes NotFoundError (or False, for delete_note/delete_notes)
    - A duplicate note↔tag link becomes DuplicateEntryError
    - Every other store exception propagates unmodified
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteshelf.database import Database, is_unique_violation
from noteshelf.exceptions import DuplicateEntryError, NotFoundError
from noteshelf.models import (
    NOTE_CONTENT_MAX_LENGTH,
    NOTE_TITLE_MAX_LENGTH,
    NOTE_TITLE_MIN_LENGTH,
    Note,
    NoteSource,
    NoteTag,
    Tag,
)
from noteshelf.models.note import utcnow
from noteshelf.schemas.note import NoteResponse
from noteshelf.schemas.tag import TagResponse
from noteshelf.validators import is_storable_id, validate_id, validate_id_list, validate_string

logger = logging.getLogger(__name__)


def _validate_note_fields(title: Any, content: Any) -> None:
    validate_string("title", title, NOTE_TITLE_MAX_LENGTH, NOTE_TITLE_MIN_LENGTH)
    validate_string("content", content, NOTE_CONTENT_MAX_LENGTH)


def next_modified_at(previous: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    """
    Timestamp for an update that is strictly later than `previous`.

    Two updates inside the clock's resolution would otherwise share a value.
    Naive datetimes (SQLite hands them back that way) are treated as UTC.
    """
    current = now or utcnow()
    if previous is None:
        return current
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if current <= previous:
        current = previous + timedelta(microseconds=1)
    return current


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note / get_note / list_notes / update_note
        - delete_note / delete_notes (report "nothing deleted" as False)
        - list_note_tags / add_tag_to_note / remove_tag_from_note
    """

    def __init__(self, database: Database):
        self.database = database

    # ── CRUD ──────────────────────────────────────────────────────────────

    async def create_note(self, title: Any, content: Any) -> NoteResponse:
        """
        Validate and insert a note.

        Returns:
            The stored note, read back so it carries the generated id and
            timestamps.

        Raises:
            ValidationError: title not 1-100 chars, content over 10000 chars,
                             or either missing / not a string
        """
        _validate_note_fields(title, content)

        async with self.database.session() as session:
            now = utcnow()
            note = Note(title=title, content=content, created_at=now, modified_at=now)
            session.add(note)
            await session.flush()  # assigns the id without committing
            await session.refresh(note)
            logger.info("Note created: id=%s", note.id)
            return NoteResponse.model_validate(note)

    async def get_note(self, note_id: Any) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            ValidationError: id is not a positive integer (or its string form)
            NotFoundError: no note with that id
        """
        note_id = validate_id(note_id)

        async with self.database.session() as session:
            note = await self._require_note(session, note_id)
            return NoteResponse.model_validate(note)

    async def list_notes(self) -> List[NoteResponse]:
        """Every note, in whatever order the store returns them."""
        async with self.database.session() as session:
            result = await session.execute(select(Note))
            return [NoteResponse.model_validate(note) for note in result.scalars().all()]

    async def update_note(self, note_id: Any, title: Any, content: Any) -> NoteResponse:
        """
        Replace a note's title and content.

        The full payload is re-validated with the create rules. modified_at is
        moved strictly forward and the returned note is re-read from the store,
        so it reflects what was persisted rather than echoing the input.

        Raises:
            ValidationError: invalid id, title or content
            NotFoundError: no note with that id
        """
        note_id = validate_id(note_id)
        _validate_note_fields(title, content)

        async with self.database.session() as session:
            note = await self._require_note(session, note_id)
            note.title = title
            note.content = content
            note.modified_at = next_modified_at(note.modified_at)
            await session.flush()
            await session.refresh(note)
            logger.info("Note updated: id=%s", note_id)
            return NoteResponse.model_validate(note)

    async def delete_note(self, note_id: Any) -> bool:
        """
        Delete one note and its links.

        Returns:
            True if the note existed and was deleted, False otherwise.
        """
        note_id = validate_id(note_id)
        return await self._delete_ids([note_id])

    async def delete_notes(self, note_ids: Any) -> bool:
        """
        Delete a batch of notes and their links in one transaction.

        Returns:
            True if at least one note was deleted, False if none of the ids
            matched.
        """
        ids = validate_id_list(note_ids)
        return await self._delete_ids(ids)

    async def _delete_ids(self, ids: Sequence[int]) -> bool:
        requested = len(ids)
        ids = [record_id for record_id in ids if is_storable_id(record_id)]
        if not ids:
            logger.info("Deleted 0 of %d requested notes", requested)
            return False

        async with self.database.session() as session:
            # Links first: SQLite does not enforce ON DELETE CASCADE by default
            await session.execute(delete(NoteTag).where(NoteTag.note_id.in_(ids)))
            await session.execute(delete(NoteSource).where(NoteSource.note_id.in_(ids)))
            result = await session.execute(delete(Note).where(Note.id.in_(ids)))
            deleted = result.rowcount or 0

        logger.info("Deleted %d of %d requested notes", deleted, requested)
        return deleted > 0

    # ── Tag links ─────────────────────────────────────────────────────────

    async def list_note_tags(self, note_id: Any) -> List[TagResponse]:
        """
        Tags attached to a note, ordered by tag id.

        Raises:
            NotFoundError: the note does not exist
        """
        note_id = validate_id(note_id)

        async with self.database.session() as session:
            await self._require_note(session, note_id)
            return await self._tags_for(session, note_id)

    async def add_tag_to_note(self, note_id: Any, tag_id: Any) -> List[TagResponse]:
        """
        Attach a tag to a note.

        Returns:
            The note's tags after the link was created.

        Raises:
            NotFoundError: the note or the tag does not exist
            DuplicateEntryError: the tag is already attached to the note
        """
        note_id = validate_id(note_id)
        tag_id = validate_id(tag_id, field="tag_id")

        async with self.database.session() as session:
            await self._require_note(session, note_id)
            if not is_storable_id(tag_id) or await session.get(Tag, tag_id) is None:
                raise NotFoundError()

            session.add(NoteTag(note_id=note_id, tag_id=tag_id))
            try:
                await session.flush()
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    logger.warning("Tag %s already attached to note %s", tag_id, note_id)
                    raise DuplicateEntryError() from exc
                raise

            return await self._tags_for(session, note_id)

    async def remove_tag_from_note(self, note_id: Any, tag_id: Any) -> None:
        """
        Detach a tag from a note.

        Raises:
            NotFoundError: no such link
        """
        note_id = validate_id(note_id)
        tag_id = validate_id(tag_id, field="tag_id")
        if not (is_storable_id(note_id) and is_storable_id(tag_id)):
            raise NotFoundError()

        async with self.database.session() as session:
            result = await session.execute(
                delete(NoteTag).where(NoteTag.note_id == note_id, NoteTag.tag_id == tag_id)
            )
            if not result.rowcount:
                raise NotFoundError()

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    async def _require_note(session: AsyncSession, note_id: int) -> Note:
        note = await session.get(Note, note_id) if is_storable_id(note_id) else None
        if note is None:
            logger.debug("Note %s not found", note_id)
            raise NotFoundError()
        return note

    @staticmethod
    async def _tags_for(session: AsyncSession, note_id: int) -> List[TagResponse]:
        result = await session.execute(
            select(Tag)
            .join(NoteTag, NoteTag.tag_id == Tag.id)
            .where(NoteTag.note_id == note_id)
            .order_by(Tag.id)
        )
        return [TagResponse.model_validate(tag) for tag in result.scalars().all()]
