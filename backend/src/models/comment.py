"""Movie review comments."""
from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, CreatedAtMixin


class Comment(Base, CreatedAtMixin):
    """
    A titled review left on a movie.

    `username` is the display name the author typed, not a reference to users.
    """

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(Integer, index=True)
    username: Mapped[str] = mapped_column(String(100))
    title: Mapped[str] = mapped_column(String(255))
    comment: Mapped[str] = mapped_column(Text)
    rating: Mapped[float] = mapped_column(Float)
    upvotes: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    downvotes: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
