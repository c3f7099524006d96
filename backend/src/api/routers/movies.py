"""Movie catalog endpoints (bearer token required, enforced at router registration)."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, verify_token
from core.errors import ApiError
from core.security import TokenIdentity
from schemas.movie import MovieGroupsResponse, MovieListResponse, MovieResponse
from services import movie_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/movies", tags=["movies"])


def _to_list(movies: list) -> list[MovieResponse]:
    return [MovieResponse.model_validate(m) for m in movies]


@router.get("", response_model=MovieListResponse | MovieGroupsResponse)
async def list_movies(
    category: str | None = None,
    db: AsyncSession = Depends(get_async_session),
) -> MovieListResponse | MovieGroupsResponse:
    """List movies of one category, or every movie grouped by category."""
    try:
        if category:
            movies = await movie_service.get_movies_by_category(db, category)
            return MovieListResponse(movies=_to_list(movies))
        groups = await movie_service.get_movies_grouped_by_type(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch movies")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while fetching movies"},
        )
    return MovieGroupsResponse(movies={k: _to_list(v) for k, v in groups.items()})


@router.get("/top", response_model=MovieListResponse)
async def top_rated_movies(
    db: AsyncSession = Depends(get_async_session),
) -> MovieListResponse:
    """The ten highest rated movies."""
    try:
        movies = await movie_service.get_top_rated_movies(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch top rated movies")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while fetching top rated movies"},
        )
    return MovieListResponse(movies=_to_list(movies))


@router.get("/me", response_model=MovieListResponse)
async def seen_movies(
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MovieListResponse:
    """Movies the caller has seen."""
    try:
        movies = await movie_service.get_seen_movies(db, identity.email)
    except SQLAlchemyError:
        logger.exception("Failed to fetch seen movies")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while fetching seen movies"},
        )
    return MovieListResponse(movies=_to_list(movies))
