"""Movie rating endpoints."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, verify_token
from core.errors import ApiError
from core.security import TokenIdentity
from schemas.movie import RatingRequest
from schemas.user import MessageResponse
from services import rating_service
from services.exceptions import InvalidRatingError, MissingParametersError, MovieNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.post("/{movie_id}", response_model=MessageResponse)
async def add_rating(
    movie_id: int,
    data: RatingRequest = RatingRequest(),
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Rate a movie from 0 to 5 and update its average."""
    try:
        await rating_service.add_rating(db, identity.email, movie_id, data.rating)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    except InvalidRatingError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": str(e)})
    except MovieNotFoundError:
        raise ApiError(status.HTTP_404_NOT_FOUND, {"message": "Movie not found"})
    except SQLAlchemyError:
        logger.exception("Failed to add rating movie_id=%s", movie_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while adding rating"},
        )
    return MessageResponse(message="Rating added")
