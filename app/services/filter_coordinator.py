"""Client-side filtering over a cached copy of the movie catalog.

The coordinator fetches the full catalog once and keeps it as the master
cache. Genre filtering is delegated to the server, whose answer is only used
as a set of admissible movie identifiers; year and rating filtering happen
locally against the cache. Every genre request is tagged with a sequence
number so that a response arriving after a newer selection is discarded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Literal

from ..errors import CoordinatorNotReady, NetworkFailure
from ..models import GenreRecord, MovieRecord
from .catalog_client import CatalogClient

logger = logging.getLogger(__name__)

CoordinatorPhase = Literal["loading", "ready"]


@dataclass(frozen=True)
class FilterState:
    """Active filter selections; ``None`` means the field is unset."""

    genre: int | None = None
    year: int | None = None
    rating: float | None = None

    def matches_local(self, movie: MovieRecord) -> bool:
        """Return whether ``movie`` passes the year and rating predicates."""

        if self.year is not None and movie.year != self.year:
            return False
        if self.rating is not None and movie.rating != self.rating:
            return False
        return True

    def is_empty(self) -> bool:
        return self.genre is None and self.year is None and self.rating is None


@dataclass(frozen=True)
class FilterOptions:
    """Values a caller may offer for each filter."""

    genres: tuple[GenreRecord, ...] = ()
    years: tuple[int, ...] = ()
    ratings: tuple[float, ...] = ()

    @classmethod
    def from_movies(cls, movies: Iterable[MovieRecord]) -> "FilterOptions":
        movies = tuple(movies)
        return cls(
            years=tuple(sorted({movie.year for movie in movies})),
            ratings=tuple(sorted({movie.rating for movie in movies})),
        )

    def with_genres(self, genres: Iterable[GenreRecord]) -> "FilterOptions":
        ordered = sorted(genres, key=lambda genre: (genre.name.casefold(), genre.id))
        return replace(self, genres=tuple(ordered))


class FilterCoordinator:
    """Owns the master cache and derives the visible movie set."""

    def __init__(self, client: CatalogClient):
        self._client = client
        self._phase: CoordinatorPhase = "loading"
        self._cache: tuple[MovieRecord, ...] = ()
        self._options = FilterOptions()
        self._state = FilterState()
        self._admissible_ids: frozenset[int] | None = None
        self._visible: tuple[MovieRecord, ...] = ()
        self._request_seq = 0
        self.load_error: NetworkFailure | None = None
        self.last_error: NetworkFailure | None = None

    @property
    def phase(self) -> CoordinatorPhase:
        return self._phase

    @property
    def is_ready(self) -> bool:
        return self._phase == "ready"

    @property
    def movies(self) -> tuple[MovieRecord, ...]:
        """The master cache."""

        return self._cache

    @property
    def options(self) -> FilterOptions:
        return self._options

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def visible(self) -> tuple[MovieRecord, ...]:
        return self._visible

    @property
    def base(self) -> tuple[MovieRecord, ...]:
        """Genre-filtered subset of the cache before year/rating predicates."""

        if self._admissible_ids is None:
            return self._cache
        return tuple(movie for movie in self._cache if movie.id in self._admissible_ids)

    async def load(self) -> None:
        """Fetch the catalog and the genre list, then enter the ready phase.

        A failure of either request leaves the coordinator loading and is
        re-raised. Loading again replaces the cache wholesale and clears every
        filter.
        """

        self._phase = "loading"
        self._request_seq += 1
        try:
            movies = await self._client.fetch_movies()
        except NetworkFailure as exc:
            self._fail_load("movies", exc)
            raise

        self._cache = tuple(movies)
        self._options = FilterOptions.from_movies(self._cache)
        logger.info("Cached %s movies", len(self._cache))

        try:
            genres = await self._client.fetch_genres()
        except NetworkFailure as exc:
            # The filters and visible set described the replaced cache.
            self._state = FilterState()
            self._admissible_ids = None
            self._visible = ()
            self._fail_load("genres", exc)
            raise

        self._options = self._options.with_genres(genres)
        self._state = FilterState()
        self._admissible_ids = None
        self.load_error = None
        self.last_error = None
        self._phase = "ready"
        self._recompute()

    async def select_genre(self, genre_id: int | None) -> tuple[MovieRecord, ...]:
        """Apply a genre selection and return the resulting visible set.

        When a newer genre selection (or a reset) is issued while this request
        is in flight, its response is discarded and the current visible set is
        returned unchanged. A failed request leaves the state untouched and
        re-raises :class:`NetworkFailure`.
        """

        self._ensure_ready()
        self._request_seq += 1
        ticket = self._request_seq

        if genre_id is None:
            self._admissible_ids = None
            self._state = replace(self._state, genre=None)
            self.last_error = None
            return self._recompute()

        try:
            identifiers = await self._client.fetch_movie_ids_by_genre(genre_id)
        except NetworkFailure as exc:
            if ticket != self._request_seq:
                logger.info("Ignoring failure of superseded genre query %s", genre_id)
                return self._visible
            self.last_error = exc
            logger.warning("Genre query %s failed, keeping previous results", genre_id)
            raise

        if ticket != self._request_seq:
            logger.info(
                "Discarding stale response for genre %s (request %s, latest %s)",
                genre_id,
                ticket,
                self._request_seq,
            )
            return self._visible

        self.last_error = None
        self._admissible_ids = identifiers
        self._state = replace(self._state, genre=genre_id)
        return self._recompute()

    def select_year(self, year: int | None) -> tuple[MovieRecord, ...]:
        self._ensure_ready()
        self._state = replace(self._state, year=year)
        return self._recompute()

    def select_rating(self, rating: float | None) -> tuple[MovieRecord, ...]:
        self._ensure_ready()
        self._state = replace(self._state, rating=rating)
        return self._recompute()

    def reset(self) -> tuple[MovieRecord, ...]:
        """Clear every filter and supersede any in-flight genre query."""

        self._ensure_ready()
        self._request_seq += 1
        self._state = FilterState()
        self._admissible_ids = None
        self.last_error = None
        return self._recompute()

    def _recompute(self) -> tuple[MovieRecord, ...]:
        state = self._state
        self._visible = tuple(movie for movie in self.base if state.matches_local(movie))
        return self._visible

    def _ensure_ready(self) -> None:
        if self._phase != "ready":
            raise CoordinatorNotReady("The movie catalog has not been loaded yet")

    def _fail_load(self, resource: str, exc: NetworkFailure) -> None:
        self.load_error = exc
        logger.warning("Loading %s failed, catalog stays unavailable: %s", resource, exc)
