"""Async client for the movie catalog HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..errors import NetworkFailure
from ..models import GenreRecord, MovieRecord

logger = logging.getLogger(__name__)


class CatalogClient:
    """Thin wrapper around the catalog endpoints."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._client = http_client

    @classmethod
    def build_http_client(cls, settings: Settings) -> httpx.AsyncClient:
        """Return an ``httpx.AsyncClient`` configured for the catalog API."""

        return httpx.AsyncClient(
            base_url=settings.catalog_api_base_url,
            timeout=httpx.Timeout(settings.client_timeout_seconds, connect=5.0),
        )

    async def fetch_movies(self) -> list[MovieRecord]:
        """Fetch the full movie catalog."""

        payload = await self._get_list("/movies")
        try:
            return [MovieRecord.model_validate(entry) for entry in payload]
        except ValidationError as exc:
            raise NetworkFailure(f"Malformed movie payload: {exc}") from exc

    async def fetch_genres(self) -> list[GenreRecord]:
        payload = await self._get_list("/genres")
        try:
            return [GenreRecord.model_validate(entry) for entry in payload]
        except ValidationError as exc:
            raise NetworkFailure(f"Malformed genre payload: {exc}") from exc

    async def fetch_movie_ids_by_genre(self, genre_id: int) -> frozenset[int]:
        """Return the identifiers of the movies the server places in ``genre_id``.

        Only the identifiers are used: the association records carry a movie
        reference whose other attributes are ignored.
        """

        payload = await self._get_list(f"/movies/genre/{genre_id}")
        identifiers: set[int] = set()
        for entry in payload:
            movie_id = self._extract_movie_id(entry)
            if movie_id is None:
                raise NetworkFailure(
                    f"Genre {genre_id} response holds a record without a movie id"
                )
            identifiers.add(movie_id)
        return frozenset(identifiers)

    async def _get_list(self, path: str) -> list[Any]:
        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("Catalog API returned %s for %s", status, path)
            raise NetworkFailure(
                f"Catalog API returned {status} for {path}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Catalog API request to %s failed: %s", path, exc.__class__.__name__
            )
            raise NetworkFailure(f"Catalog API request to {path} failed") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkFailure(f"Catalog API returned invalid JSON for {path}") from exc
        if not isinstance(payload, list):
            raise NetworkFailure(f"Catalog API returned a non-list payload for {path}")
        return payload

    @staticmethod
    def _extract_movie_id(entry: Any) -> int | None:
        if not isinstance(entry, dict):
            return None
        reference = entry.get("movie")
        if isinstance(reference, dict):
            candidate = reference.get("id")
        else:
            # Bare movie records are accepted as well.
            candidate = entry.get("id")
        if isinstance(candidate, bool) or not isinstance(candidate, int):
            return None
        return candidate
