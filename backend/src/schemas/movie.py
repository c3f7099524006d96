"""Pydantic schemas for movie and rating endpoints."""
from datetime import date

from pydantic import BaseModel, ConfigDict

from schemas.validators import OptionalFloat

MIN_RATING = 0.0
MAX_RATING = 5.0


class MovieResponse(BaseModel):
    """Schema for movie responses."""

    model_config = ConfigDict(from_attributes=True)

    movie_id: int
    title: str
    release_date: date | None = None
    author: str | None = None
    type: str | None = None
    poster: str | None = None
    backdrop_poster: str | None = None
    overview: str | None = None
    rating: float | None = None


class MovieListResponse(BaseModel):
    movies: list[MovieResponse]


class MovieGroupsResponse(BaseModel):
    """Movies keyed by their type."""

    movies: dict[str, list[MovieResponse]]


class RatingRequest(BaseModel):
    """Body for POST /ratings/{movie_id}. Range is checked by the handler."""

    rating: OptionalFloat = None
