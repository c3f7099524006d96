"""Service layer for movie comments."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.comment import Comment
from schemas.comment import CommentCreateRequest
from schemas.movie import MAX_RATING, MIN_RATING
from services.exceptions import InvalidRatingError, MissingParametersError

logger = logging.getLogger(__name__)


async def add_comment(db: AsyncSession, movie_id: int, data: CommentCreateRequest) -> Comment:
    """
    Store a comment and commit it.

    Raises:
        MissingParametersError: rating, username, comment, or title absent.
        InvalidRatingError: rating outside 0..5.
    """
    missing = [
        name
        for name in ("rating", "username", "comment", "title")
        if getattr(data, name) is None
    ]
    if missing:
        raise MissingParametersError(missing)
    if not MIN_RATING <= data.rating <= MAX_RATING:
        raise InvalidRatingError(data.rating, MIN_RATING, MAX_RATING)

    comment = Comment(
        movie_id=movie_id,
        rating=data.rating,
        username=data.username,
        comment=data.comment,
        title=data.title,
    )
    db.add(comment)
    await db.commit()
    await db.refresh(comment)
    logger.info("Comment added movie_id=%s comment_id=%s", movie_id, comment.id)
    return comment


async def get_comments_for_movie(db: AsyncSession, movie_id: int) -> list[Comment]:
    """Comments on a movie, oldest first."""
    result = await db.execute(
        select(Comment)
        .where(Comment.movie_id == movie_id)
        .order_by(Comment.created_at, Comment.id),
    )
    return list(result.scalars().all())
