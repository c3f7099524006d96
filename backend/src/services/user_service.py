"""Service layer for account registration and user lookup."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import hash_password_async
from models.user import Address, User
from schemas.user import RegisterRequest
from services.exceptions import (
    MissingParametersError,
    RegistrationFailedError,
    UserAlreadyExistsError,
)

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingParametersError(missing)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by (normalized) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def _insert_user(db: AsyncSession, user: User) -> None:
    """
    Insert the user row.

    The unique index on email is the source of truth: a violation here means a
    concurrent registration won the race after our existence check.
    """
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        raise UserAlreadyExistsError(user.email) from e


async def _insert_address(db: AsyncSession, address: Address) -> None:
    db.add(address)
    await db.flush()


async def register_user(db: AsyncSession, data: RegisterRequest) -> User:
    """
    Create a user and their address atomically.

    The existence check and both inserts share one session, i.e. one pooled
    connection and one transaction. Any failure rolls the whole transaction
    back, so either both rows persist or neither does.

    Args:
        db: Database session.
        data: Registration payload (already normalized).

    Returns:
        The committed User.

    Raises:
        MissingParametersError: email, username, password, or country absent.
        UserAlreadyExistsError: the email is already registered.
        RegistrationFailedError: any other data-layer failure.

    Note:
        Commits before returning so a success response is only sent for a
        durable write.
    """
    _require(
        email=data.email,
        username=data.username,
        password=data.password,
        country=data.country,
    )
    # Hash before touching the database to keep the connection checkout short
    password_hash = await hash_password_async(data.password)

    try:
        if await get_user_by_email(db, data.email) is not None:
            raise UserAlreadyExistsError(data.email)

        user = User(email=data.email, username=data.username, password=password_hash)
        await _insert_user(db, user)
        logger.info("User row added email=%s", data.email)

        await _insert_address(
            db,
            Address(
                email=data.email,
                country=data.country,
                city=data.city,
                street=data.street,
            ),
        )
        logger.info("Address row added email=%s", data.email)

        await db.commit()
    except UserAlreadyExistsError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Registration transaction rolled back email=%s", data.email)
        raise RegistrationFailedError(data.email) from e

    return user


async def create_account(
    db: AsyncSession,
    email: str | None,
    username: str | None,
    password: str | None,
) -> User:
    """
    Create a user without an address (the /auth/signup variant).

    Raises:
        MissingParametersError: a field is absent.
        UserAlreadyExistsError: the email is already registered.
        RegistrationFailedError: any other data-layer failure.
    """
    _require(username=username, email=email, password=password)
    password_hash = await hash_password_async(password)

    user = User(email=email, username=username, password=password_hash)
    try:
        await _insert_user(db, user)
        await db.commit()
    except UserAlreadyExistsError:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to save user email=%s", email)
        raise RegistrationFailedError(email) from e

    await db.refresh(user)
    return user
