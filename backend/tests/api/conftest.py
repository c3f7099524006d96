"""Shared helpers for API tests."""
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.security import TokenIdentity, create_access_token, hash_password
from models.movie import Movie
from models.user import User

DEFAULT_PASSWORD = "correct horse battery staple"


async def add_user(
    db_session: AsyncSession,
    email: str = "alice@example.com",
    username: str = "alice",
    password: str = DEFAULT_PASSWORD,
) -> User:
    """Insert a user with a real bcrypt hash."""
    user = User(email=email, username=username, password=hash_password(password, rounds=4))
    db_session.add(user)
    await db_session.commit()
    return user


async def add_movie(
    db_session: AsyncSession,
    movie_id: int,
    title: str | None = None,
    type: str | None = "action",  # noqa: A002
    rating: float = 0.0,
    release_date: date | None = None,
) -> Movie:
    movie = Movie(
        movie_id=movie_id,
        title=title or f"Movie {movie_id}",
        type=type,
        rating=rating,
        release_date=release_date,
    )
    db_session.add(movie)
    await db_session.commit()
    return movie


def bearer_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a freshly signed token for the user."""
    token = create_access_token(TokenIdentity(email=user.email, id=user.id), get_settings())
    return {"Authorization": f"Bearer {token}"}
