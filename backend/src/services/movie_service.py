"""Service layer for browsing the movie catalog."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.movie import Movie, SeenMovie

UNCATEGORIZED = "uncategorized"


async def get_movies_by_category(db: AsyncSession, category: str) -> list[Movie]:
    """Movies of one type, newest release first."""
    result = await db.execute(
        select(Movie)
        .where(Movie.type == category)
        .order_by(Movie.release_date.desc(), Movie.movie_id),
    )
    return list(result.scalars().all())


async def get_movies_grouped_by_type(db: AsyncSession) -> dict[str, list[Movie]]:
    """All movies keyed by type, each group in movie_id order."""
    result = await db.execute(select(Movie).order_by(Movie.type, Movie.movie_id))
    groups: dict[str, list[Movie]] = {}
    for movie in result.scalars().all():
        groups.setdefault(movie.type or UNCATEGORIZED, []).append(movie)
    return groups


async def get_top_rated_movies(db: AsyncSession, limit: int = 10) -> list[Movie]:
    result = await db.execute(
        select(Movie).order_by(Movie.rating.desc(), Movie.movie_id).limit(limit),
    )
    return list(result.scalars().all())


async def get_seen_movies(db: AsyncSession, email: str) -> list[Movie]:
    """Movies the user has marked as seen."""
    result = await db.execute(
        select(Movie)
        .join(SeenMovie, SeenMovie.movie_id == Movie.movie_id)
        .where(SeenMovie.email == email)
        .order_by(Movie.movie_id),
    )
    return list(result.scalars().all())
