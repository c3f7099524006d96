"""Tests for rating movies."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from services.exceptions import InvalidRatingError, MissingParametersError, MovieNotFoundError
from services.rating_service import add_rating
from tests.api.conftest import add_movie, add_user


async def test__add_rating__average_of_all_ratings(db_session: AsyncSession) -> None:
    user = await add_user(db_session)
    movie = await add_movie(db_session, 1)

    assert await add_rating(db_session, user.email, 1, 5) == 5.0
    assert await add_rating(db_session, user.email, 1, 0) == 2.5
    assert await add_rating(db_session, user.email, 1, 4) == 3.0
    assert movie.rating == 3.0


@pytest.mark.parametrize("rating", [0, 5, 2.5])
async def test__add_rating__bounds_inclusive(db_session: AsyncSession, rating: float) -> None:
    user = await add_user(db_session)
    await add_movie(db_session, 1)

    assert await add_rating(db_session, user.email, 1, rating) == rating


@pytest.mark.parametrize("rating", [-0.1, 5.01, 100])
async def test__add_rating__out_of_range(db_session: AsyncSession, rating: float) -> None:
    with pytest.raises(InvalidRatingError):
        await add_rating(db_session, "a@b.c", 1, rating)


async def test__add_rating__missing(db_session: AsyncSession) -> None:
    with pytest.raises(MissingParametersError):
        await add_rating(db_session, "a@b.c", 1, None)


async def test__add_rating__unknown_movie(db_session: AsyncSession) -> None:
    with pytest.raises(MovieNotFoundError):
        await add_rating(db_session, "a@b.c", 404, 3)
