"""Tests for loading the JSON catalog seed."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from sqlalchemy import func, select

from app.database import Database
from app.db_models import MovieGenre
from app.seed import CatalogDocument, load_catalog_document, seed_catalog

SAMPLE_PATH = Path(__file__).resolve().parents[1] / "data" / "catalog.json"


def test_sample_document_is_valid() -> None:
    document = load_catalog_document(SAMPLE_PATH)

    assert len(document.movies) == 6
    assert {genre.name for genre in document.genres} >= {"Drama", "Action"}
    heat = next(movie for movie in document.movies if movie.title == "Heat")
    assert heat.wikipedia_url is None
    assert heat.genres == [2, 5, 1]


def test_seed_only_fills_an_empty_catalog(tmp_path, catalog_document) -> None:
    """Seeding twice should not duplicate rows."""

    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")

    async def _run() -> tuple[int, int, int]:
        try:
            await database.create_all()
            first = await seed_catalog(database, catalog_document)
            second = await seed_catalog(database, catalog_document)
            async with database.session() as session:
                links = await session.scalar(select(func.count()).select_from(MovieGenre))
            return first, second, links or 0
        finally:
            await database.dispose()

    first, second, links = asyncio.run(_run())

    assert first == 3
    assert second == 0
    # Duplicate genre references are stored as separate association rows.
    assert links == 4


def test_seed_rejects_unknown_genre_references(tmp_path) -> None:
    document = CatalogDocument.model_validate(
        {
            "genres": [{"id": 1, "name": "Drama"}],
            "movies": [
                {
                    "id": 1,
                    "title": "Lonely",
                    "year": 1990,
                    "rating": 6,
                    "imageUrl": "https://img.example.com/lonely.jpg",
                    "genres": [1, 42],
                }
            ],
        }
    )
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'bad.db'}")

    async def _run() -> None:
        try:
            await database.create_all()
            await seed_catalog(database, document)
        finally:
            await database.dispose()

    with pytest.raises(ValueError, match="unknown genres"):
        asyncio.run(_run())
