"""Movie catalog models."""
from datetime import date

from sqlalchemy import Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Movie(Base):
    """Catalog entry. `rating` caches the average of the movie's ratings."""

    __tablename__ = "movies"

    movie_id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        index=True,
        comment="Category used for grouping, e.g. 'action'",
    )
    poster: Mapped[str | None] = mapped_column(String(500), nullable=True)
    backdrop_poster: Mapped[str | None] = mapped_column(String(500), nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float, default=0.0, server_default="0")


class SeenMovie(Base):
    """Movies a user has watched."""

    __tablename__ = "seen_movies"

    email: Mapped[str] = mapped_column(
        ForeignKey("users.email", ondelete="CASCADE"),
        primary_key=True,
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        primary_key=True,
    )


class Rating(Base):
    """A single user's rating of a movie (0 to 5)."""

    __tablename__ = "ratings"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(
        ForeignKey("users.email", ondelete="CASCADE"),
        index=True,
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        index=True,
    )
    rating: Mapped[float] = mapped_column(Float)
