"""Service layer for movie ratings."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.movie import Movie, Rating
from schemas.movie import MAX_RATING, MIN_RATING
from services.exceptions import InvalidRatingError, MissingParametersError, MovieNotFoundError

logger = logging.getLogger(__name__)


async def add_rating(
    db: AsyncSession,
    email: str,
    movie_id: int,
    rating: float | None,
) -> float:
    """
    Record a rating and refresh the movie's cached average.

    Returns:
        The movie's new average rating.

    Raises:
        MissingParametersError: rating absent.
        InvalidRatingError: rating outside 0..5.
        MovieNotFoundError: unknown movie.

    Note:
        Commits before returning so the response reflects a durable write.
    """
    if rating is None:
        raise MissingParametersError(["rating"])
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError(rating, MIN_RATING, MAX_RATING)

    movie = await db.get(Movie, movie_id)
    if movie is None:
        raise MovieNotFoundError(movie_id)

    db.add(Rating(email=email, movie_id=movie_id, rating=rating))
    await db.flush()

    result = await db.execute(
        select(func.avg(Rating.rating)).where(Rating.movie_id == movie_id),
    )
    movie.rating = float(result.scalar_one())
    await db.commit()

    logger.info("Rating added movie_id=%s average=%.2f", movie_id, movie.rating)
    return movie.rating
