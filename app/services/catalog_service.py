"""Validation and response shaping on top of :class:`CatalogStore`."""

from __future__ import annotations

import re
from typing import Any

from ..errors import InvalidRequest
from ..models import MovieGenreRecord
from .catalog_store import CatalogStore

_INTEGER_RE = re.compile(r"^-?\d+$")
# Identifiers are stored as signed 64-bit integers.
MAX_GENRE_ID = 2**63 - 1


def parse_genre_id(value: Any) -> int:
    """Return ``value`` as a non-negative genre identifier.

    Raises :class:`InvalidRequest` for non-numeric or negative input.
    """

    if isinstance(value, bool):
        raise InvalidRequest("Genre id must be an integer")
    if isinstance(value, int):
        candidate = value
    else:
        text = str(value).strip() if value is not None else ""
        if not _INTEGER_RE.match(text):
            raise InvalidRequest(f"Genre id must be an integer, got {value!r}")
        candidate = int(text)
    if candidate < 0:
        raise InvalidRequest(f"Genre id must not be negative, got {candidate}")
    return candidate


class CatalogService:
    """Stateless façade translating store results into API payloads."""

    def __init__(self, store: CatalogStore):
        self._store = store

    @property
    def store(self) -> CatalogStore:
        return self._store

    async def list_movies(self) -> list[dict[str, Any]]:
        movies = await self._store.list_movies()
        return [movie.to_payload() for movie in movies]

    async def list_genres(self) -> list[dict[str, Any]]:
        genres = await self._store.list_genres()
        return [genre.to_payload() for genre in genres]

    async def list_movies_by_genre(self, raw_genre_id: Any) -> list[dict[str, Any]]:
        """Return association records for every movie in the requested genre."""

        genre_id = parse_genre_id(raw_genre_id)
        if genre_id > MAX_GENRE_ID:
            return []
        genre = await self._store.get_genre(genre_id)
        if genre is None:
            return []
        movies = await self._store.list_movies_by_genre(genre_id)
        return [
            MovieGenreRecord(movie=movie, genre=genre).to_payload()
            for movie in movies
        ]
