"""SQLAlchemy ORM models backing the movie catalog."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


class Movie(Base):
    """A catalog entry with descriptive and rating attributes."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    plot: Mapped[str] = mapped_column(Text, default="")
    year: Mapped[int] = mapped_column(Integer)
    rating: Mapped[float] = mapped_column(Float)
    image_url: Mapped[str] = mapped_column(String(512))
    wikipedia_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    genre_links: Mapped[list["MovieGenre"]] = relationship(
        back_populates="movie", cascade="all, delete-orphan"
    )


class Genre(Base):
    """A named category a movie may belong to."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True)

    movie_links: Mapped[list["MovieGenre"]] = relationship(
        back_populates="genre", cascade="all, delete-orphan"
    )


class MovieGenre(Base):
    """Association row linking one movie to one genre."""

    __tablename__ = "movie_genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("movies.id", ondelete="CASCADE"), index=True
    )
    genre_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("genres.id", ondelete="CASCADE"), index=True
    )

    movie: Mapped[Movie] = relationship(back_populates="genre_links")
    genre: Mapped[Genre] = relationship(back_populates="movie_links")
