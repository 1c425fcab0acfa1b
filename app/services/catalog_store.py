"""Read-only queries over the movie catalog tables."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy import Select, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..db_models import Genre, Movie, MovieGenre
from ..errors import StorageUnavailable
from ..models import GenreRecord, MovieRecord

logger = logging.getLogger(__name__)


class CatalogStore:
    """Answers the catalog queries against the relational store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_movies(self) -> list[MovieRecord]:
        """Return every movie ordered by identifier."""

        stmt = select(Movie).order_by(Movie.id)
        movies = await self._fetch_all(stmt, operation="list_movies")
        return [MovieRecord.from_entity(movie) for movie in movies]

    async def list_genres(self) -> list[GenreRecord]:
        """Return every genre ordered by identifier."""

        stmt = select(Genre).order_by(Genre.id)
        genres = await self._fetch_all(stmt, operation="list_genres")
        return [GenreRecord.from_entity(genre) for genre in genres]

    async def get_genre(self, genre_id: int) -> GenreRecord | None:
        stmt = select(Genre).where(Genre.id == genre_id)
        genres = await self._fetch_all(stmt, operation="get_genre")
        if not genres:
            return None
        return GenreRecord.from_entity(genres[0])

    async def list_movies_by_genre(self, genre_id: int) -> list[MovieRecord]:
        """Return the movies linked to ``genre_id``, each movie at most once.

        Unknown genres are not an error and simply match nothing.
        """

        stmt = (
            select(Movie)
            .join(MovieGenre, MovieGenre.movie_id == Movie.id)
            .where(MovieGenre.genre_id == genre_id)
            .distinct()
            .order_by(Movie.id)
        )
        movies = await self._fetch_all(stmt, operation="list_movies_by_genre")

        records: list[MovieRecord] = []
        seen: set[int] = set()
        for movie in movies:
            if movie.id in seen:
                continue
            seen.add(movie.id)
            records.append(MovieRecord.from_entity(movie))
        return records

    async def _fetch_all(self, stmt: Select[Any], *, operation: str) -> Sequence[Any]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.scalars().all()
        except DBAPIError as exc:
            logger.exception("Catalog storage query %s failed", operation)
            raise StorageUnavailable(
                f"Catalog storage is unavailable ({operation})"
            ) from exc
