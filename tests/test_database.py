from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError

from app.database import Database
from app.db_models import MovieGenre


def test_create_all_creates_catalog_tables(tmp_path) -> None:
    """The movie, genre and association tables should be created."""

    database_path = tmp_path / "fresh.db"
    database = Database(f"sqlite+aiosqlite:///{database_path}")
    asyncio.run(database.create_all())
    asyncio.run(database.dispose())

    inspector_engine = create_engine(f"sqlite:///{database_path}")
    try:
        inspector = inspect(inspector_engine)
        tables = set(inspector.get_table_names())
        link_columns = {
            column["name"] for column in inspector.get_columns("movie_genres")
        }
    finally:
        inspector_engine.dispose()

    assert {"movies", "genres", "movie_genres"} <= tables
    assert link_columns == {"id", "movie_id", "genre_id"}


def test_sqlite_foreign_keys_are_enforced(tmp_path) -> None:
    """Association rows must reference existing movies and genres."""

    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'fk.db'}")

    async def _insert_orphan_link() -> None:
        try:
            await database.create_all()
            async with database.session() as session:
                session.add(MovieGenre(movie_id=1, genre_id=1))
                await session.commit()
        finally:
            await database.dispose()

    with pytest.raises(IntegrityError):
        asyncio.run(_insert_orphan_link())
