"""Movie comment endpoints (bearer token required, enforced at router registration)."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from core.errors import ApiError
from schemas.comment import CommentCreateRequest, CommentListResponse, CommentResponse
from schemas.user import MessageResponse
from services import comment_service
from services.exceptions import InvalidRatingError, MissingParametersError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["comments"])


def _parse_movie_id(raw: str) -> int | None:
    """Movie ids arrive as path text; anything that is not an integer is absent."""
    try:
        return int(raw)
    except ValueError:
        return None


@router.get("/{movie_id}", response_model=CommentListResponse)
async def list_comments(
    movie_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> CommentListResponse:
    """Comments left on a movie."""
    parsed_id = _parse_movie_id(movie_id)
    if parsed_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "movie id missing"})
    try:
        comments = await comment_service.get_comments_for_movie(db, parsed_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch comments movie_id=%s", parsed_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while fetching comments"},
        )
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments],
    )


@router.post("/{movie_id}", response_model=MessageResponse)
async def add_comment(
    movie_id: str,
    data: CommentCreateRequest = CommentCreateRequest(),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Leave a titled, rated comment on a movie."""
    parsed_id = _parse_movie_id(movie_id)
    if parsed_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    try:
        await comment_service.add_comment(db, parsed_id, data)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    except InvalidRatingError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": str(e)})
    except SQLAlchemyError:
        logger.exception("Failed to add comment movie_id=%s", parsed_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while adding comment"},
        )
    return MessageResponse(message="Comment added")
