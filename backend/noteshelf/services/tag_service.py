"""
NoteShelf Backend — Tag Service
=================================

What:  Business logic for tags: create, list, look up and delete by id or name.
How:   Same shape as NoteService: validate, then one `database.session()`.

Uniqueness:
    Tag names are unique. The service does not check for an existing name
    before inserting (two concurrent requests could both pass such a check);
    it inserts and lets the store's UNIQUE constraint decide. A unique
    violation is translated into DuplicateEntryError; any other
    IntegrityError or driver failure propagates unchanged.
"""

import logging
from typing import Any, List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteshelf.database import Database, is_unique_violation
from noteshelf.exceptions import DuplicateEntryError, NotFoundError
from noteshelf.models import TAG_NAME_MAX_LENGTH, TAG_NAME_MIN_LENGTH, NoteTag, Tag
from noteshelf.schemas.tag import TagResponse
from noteshelf.validators import is_storable_id, validate_id, validate_string

logger = logging.getLogger(__name__)


def _validate_name(name: Any) -> str:
    return validate_string("name", name, TAG_NAME_MAX_LENGTH, TAG_NAME_MIN_LENGTH)


class TagService:
    """Business logic layer for tag operations."""

    def __init__(self, database: Database):
        self.database = database

    async def create_tag(self, name: Any) -> TagResponse:
        """
        Validate and insert a tag.

        Raises:
            ValidationError: name missing, not a string, or not 1-25 chars
            DuplicateEntryError: a tag with this name already exists
        """
        _validate_name(name)

        async with self.database.session() as session:
            tag = Tag(name=name)
            session.add(tag)
            try:
                await session.flush()
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    logger.warning("Rejected duplicate tag name")
                    raise DuplicateEntryError() from exc
                raise
            await session.refresh(tag)
            logger.info("Tag created: id=%s", tag.id)
            return TagResponse.model_validate(tag)

    async def list_tags(self) -> List[TagResponse]:
        async with self.database.session() as session:
            result = await session.execute(select(Tag))
            return [TagResponse.model_validate(tag) for tag in result.scalars().all()]

    async def get_tag(self, tag_id: Any) -> TagResponse:
        """Raises NotFoundError when no tag has this id."""
        tag_id = validate_id(tag_id)
        if not is_storable_id(tag_id):
            raise NotFoundError()

        async with self.database.session() as session:
            tag = await session.get(Tag, tag_id)
            if tag is None:
                raise NotFoundError()
            return TagResponse.model_validate(tag)

    async def get_tag_by_name(self, name: Any) -> TagResponse:
        """Raises NotFoundError when no tag has this exact name."""
        _validate_name(name)

        async with self.database.session() as session:
            result = await session.execute(select(Tag).where(Tag.name == name))
            tag = result.scalar_one_or_none()
            if tag is None:
                raise NotFoundError()
            return TagResponse.model_validate(tag)

    async def delete_tag(self, tag_id: Any) -> None:
        """
        Delete a tag by id. Links to notes go with it (ON DELETE CASCADE,
        plus an explicit delete for stores that do not enforce foreign keys).

        Raises:
            NotFoundError: nothing was deleted
        """
        tag_id = validate_id(tag_id)
        if not is_storable_id(tag_id):
            raise NotFoundError()

        async with self.database.session() as session:
            await self._delete_links(session, [tag_id])
            result = await session.execute(delete(Tag).where(Tag.id == tag_id))
            if not result.rowcount:
                raise NotFoundError()
        logger.info("Tag deleted: id=%s", tag_id)

    async def delete_tag_by_name(self, name: Any) -> None:
        """Delete a tag by name. Raises NotFoundError when nothing was deleted."""
        _validate_name(name)

        async with self.database.session() as session:
            result = await session.execute(select(Tag.id).where(Tag.name == name))
            ids = list(result.scalars().all())
            if not ids:
                raise NotFoundError()
            await self._delete_links(session, ids)
            await session.execute(delete(Tag).where(Tag.id.in_(ids)))
        logger.info("Tag deleted by name")

    @staticmethod
    async def _delete_links(session: AsyncSession, tag_ids: List[int]) -> None:
        await session.execute(delete(NoteTag).where(NoteTag.tag_id.in_(tag_ids)))
