"""Load a JSON catalog document into an empty database."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field
from sqlalchemy import func, select

from .database import Database
from .db_models import Genre, Movie, MovieGenre
from .models import GenreRecord, MovieRecord

logger = logging.getLogger(__name__)


class SeedMovie(MovieRecord):
    """Movie entry of a seed document, with the ids of its genres."""

    genres: list[int] = Field(default_factory=list)


class CatalogDocument(BaseModel):
    genres: list[GenreRecord] = Field(default_factory=list)
    movies: list[SeedMovie] = Field(default_factory=list)


def load_catalog_document(path: Path) -> CatalogDocument:
    """Parse and validate the seed document stored at ``path``."""

    return CatalogDocument.model_validate_json(path.read_bytes())


async def seed_catalog(database: Database, document: CatalogDocument) -> int:
    """Insert ``document`` when the catalog is empty.

    Returns the number of movies inserted.
    """

    known_genres = {genre.id for genre in document.genres}
    for movie in document.movies:
        unknown = [genre_id for genre_id in movie.genres if genre_id not in known_genres]
        if unknown:
            raise ValueError(
                f"Movie {movie.id} references unknown genres: {sorted(unknown)}"
            )

    async with database.session() as session:
        existing = await session.scalar(select(func.count()).select_from(Movie))
        if existing:
            logger.info("Catalog already holds %s movies, skipping seed", existing)
            return 0

        session.add_all(Genre(id=genre.id, name=genre.name) for genre in document.genres)
        for movie in document.movies:
            session.add(
                Movie(
                    id=movie.id,
                    title=movie.title,
                    plot=movie.plot,
                    year=movie.year,
                    rating=movie.rating,
                    image_url=movie.image_url,
                    wikipedia_url=movie.wikipedia_url,
                )
            )
        await session.flush()
        session.add_all(
            MovieGenre(movie_id=movie.id, genre_id=genre_id)
            for movie in document.movies
            for genre_id in movie.genres
        )
        await session.commit()

    logger.info(
        "Seeded catalog with %s movies and %s genres",
        len(document.movies),
        len(document.genres),
    )
    return len(document.movies)
