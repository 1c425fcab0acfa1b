"""Pytest configuration and shared catalog fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from app.models import GenreRecord, MovieRecord  # noqa: E402
from app.seed import CatalogDocument  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def catalog_document() -> CatalogDocument:
    """Small catalog where movie 2 is linked to genre 5 twice."""

    return CatalogDocument.model_validate(
        {
            "genres": [
                {"id": 1, "name": "Drama"},
                {"id": 5, "name": "Science Fiction"},
                {"id": 7, "name": "Comedy"},
            ],
            "movies": [
                {
                    "id": 1,
                    "title": "First Light",
                    "plot": "A quiet drama.",
                    "year": 2000,
                    "rating": 7,
                    "imageUrl": "https://img.example.com/1.jpg",
                    "wikipediaUrl": "https://en.wikipedia.org/wiki/First_Light",
                    "genres": [1],
                },
                {
                    "id": 2,
                    "title": "Orbit",
                    "plot": "Lost in space.",
                    "year": 2010,
                    "rating": 9,
                    "imageUrl": "https://img.example.com/2.jpg",
                    "genres": [5, 5, 1],
                },
                {
                    "id": 3,
                    "title": "Unsorted",
                    "plot": "Belongs nowhere.",
                    "year": 2010,
                    "rating": 7.5,
                    "imageUrl": "https://img.example.com/3.jpg",
                    "genres": [],
                },
            ],
        }
    )


class StubCatalogStore:
    """In-memory stand-in for :class:`app.services.catalog_store.CatalogStore`."""

    def __init__(self) -> None:
        self.movies = [
            MovieRecord(
                id=1,
                title="First Light",
                plot="A quiet drama.",
                year=2000,
                rating=7,
                image_url="https://img.example.com/1.jpg",
                wikipedia_url="https://en.wikipedia.org/wiki/First_Light",
            ),
            MovieRecord(
                id=2,
                title="Orbit",
                plot="Lost in space.",
                year=2010,
                rating=9,
                image_url="https://img.example.com/2.jpg",
            ),
        ]
        self.genres = [GenreRecord(id=5, name="Science Fiction")]
        self.links = {5: [2]}
        self.genre_queries: list[int] = []

    async def list_movies(self) -> list[MovieRecord]:
        return list(self.movies)

    async def list_genres(self) -> list[GenreRecord]:
        return list(self.genres)

    async def get_genre(self, genre_id: int) -> GenreRecord | None:
        return next((genre for genre in self.genres if genre.id == genre_id), None)

    async def list_movies_by_genre(self, genre_id: int) -> list[MovieRecord]:
        self.genre_queries.append(genre_id)
        wanted = self.links.get(genre_id, [])
        return [movie for movie in self.movies if movie.id in wanted]


@pytest.fixture
def stub_store() -> StubCatalogStore:
    return StubCatalogStore()
