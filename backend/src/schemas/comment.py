"""Pydantic schemas for movie comments."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from schemas.validators import OptionalFloat, OptionalText


class CommentCreateRequest(BaseModel):
    """Body for POST /comments/{movie_id}. Presence and range are checked by the service."""

    rating: OptionalFloat = None
    username: OptionalText = None
    comment: OptionalText = None
    title: OptionalText = None


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    movie_id: int
    username: str
    title: str
    comment: str
    rating: float
    upvotes: int
    downvotes: int
    created_at: datetime


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
