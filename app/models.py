"""Pydantic models describing catalog payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .db_models import Genre, Movie


class MovieRecord(BaseModel):
    """Represents a single movie as exchanged over the API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    title: str
    plot: str = ""
    year: int
    rating: float
    image_url: str = Field(alias="imageUrl")
    wikipedia_url: str | None = Field(default=None, alias="wikipediaUrl")

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieRecord":
        return cls(
            id=movie.id,
            title=movie.title,
            plot=movie.plot or "",
            year=movie.year,
            rating=movie.rating,
            image_url=movie.image_url,
            wikipedia_url=movie.wikipedia_url,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON shape served by ``/movies``."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class GenreRecord(BaseModel):
    """A named genre."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str

    @classmethod
    def from_entity(cls, genre: Genre) -> "GenreRecord":
        return cls(id=genre.id, name=genre.name)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class MovieGenreRecord(BaseModel):
    """Association-shaped record returned by genre scoped movie queries."""

    model_config = ConfigDict(frozen=True)

    movie: MovieRecord
    genre: GenreRecord

    def to_payload(self) -> dict[str, Any]:
        return {"movie": self.movie.to_payload(), "genre": self.genre.to_payload()}
