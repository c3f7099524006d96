"""SQLAlchemy models."""
from models.base import Base
from models.comment import Comment
from models.message import Message
from models.movie import Movie, Rating, SeenMovie
from models.user import Address, User

__all__ = [
    "Address",
    "Base",
    "Comment",
    "Message",
    "Movie",
    "Rating",
    "SeenMovie",
    "User",
]
