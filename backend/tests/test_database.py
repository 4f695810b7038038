"""
NoteShelf Backend — Store Capability Tests
============================================

What:  Database.session() transaction/release semantics, schema helpers and
       unique-violation classification.
How:   A real SQLite database for behaviour, mocks where the interesting part
       is which session methods were awaited.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from noteshelf.database import Database, is_unique_violation
from noteshelf.models import Note, Tag


async def _count(database: Database, model) -> int:
    async with database.session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


class TestSession:
    @pytest.mark.asyncio
    async def test_commits_on_success(self, database):
        async with database.session() as session:
            session.add(Tag(name="work"))

        assert await _count(database, Tag) == 1

    @pytest.mark.asyncio
    async def test_rolls_back_when_body_raises(self, database):
        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(Tag(name="work"))
                await session.flush()
                raise RuntimeError("boom")

        assert await _count(database, Tag) == 0

    @pytest.mark.asyncio
    async def test_releases_on_every_path(self, database):
        session = AsyncMock()
        database._session_factory = MagicMock(return_value=session)

        with pytest.raises(ValueError):
            async with database.session():
                raise ValueError("bad")

        session.commit.assert_not_awaited()
        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()

        session.reset_mock()
        async with database.session():
            pass

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()
        session.close.assert_awaited_once()


class TestSchemaHelpers:
    @pytest.mark.asyncio
    async def test_ping(self, database):
        await database.ping()

    @pytest.mark.asyncio
    async def test_clear_empties_every_table(self, database):
        async with database.session() as session:
            session.add(Tag(name="a"))
            session.add(Note(title="t", content="c"))

        await database.clear()

        assert await _count(database, Tag) == 0
        assert await _count(database, Note) == 0

    def test_sqlite_url_skips_pool_sizing(self, tmp_path):
        # QueuePool arguments would be rejected by the SQLite pool
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'x.db'}", pool_size=5)
        assert db.url.startswith("sqlite")


class _PgError(Exception):
    def __init__(self, pgcode):
        super().__init__("violation")
        self.pgcode = pgcode


class _AsyncpgError(Exception):
    def __init__(self, sqlstate):
        super().__init__("violation")
        self.sqlstate = sqlstate


def _integrity(orig) -> IntegrityError:
    return IntegrityError("INSERT INTO tags (name) VALUES (?)", {}, orig)


class TestIsUniqueViolation:
    def test_postgres_unique_code(self):
        assert is_unique_violation(_integrity(_PgError("23505")))

    def test_postgres_other_integrity_code(self):
        # 23503 = foreign_key_violation
        assert not is_unique_violation(_integrity(_PgError("23503")))

    def test_asyncpg_sqlstate(self):
        assert is_unique_violation(_integrity(_AsyncpgError("23505")))
        assert not is_unique_violation(_integrity(_AsyncpgError("23502")))

    def test_mysql_errno(self):
        assert is_unique_violation(_integrity(Exception(1062, "Duplicate entry 'a' for key 'name'")))

    def test_sqlite_message(self):
        assert is_unique_violation(_integrity(Exception("UNIQUE constraint failed: tags.name")))

    def test_sqlite_not_null_is_not_unique(self):
        assert not is_unique_violation(_integrity(Exception("NOT NULL constraint failed: tags.name")))

    @pytest.mark.asyncio
    async def test_real_duplicate_is_detected(self, database):
        async with database.session() as session:
            session.add(Tag(name="dup"))

        with pytest.raises(IntegrityError) as exc_info:
            async with database.session() as session:
                session.add(Tag(name="dup"))

        assert is_unique_violation(exc_info.value)
