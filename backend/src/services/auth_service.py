"""Service layer for sign-in, sign-out and password changes."""
import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from core.security import (
    TokenIdentity,
    create_access_token,
    hash_password_async,
    verify_dummy_password_async,
    verify_password_async,
)
from core.sessions import ServerSession
from models.user import User
from services.exceptions import (
    MissingParametersError,
    PasswordMismatchError,
    SamePasswordError,
    UserNotFoundError,
)
from services.user_service import get_user_by_email

logger = logging.getLogger(__name__)


@dataclass
class SignInResult:
    """Outcome of a successful sign-in."""

    token: str
    user: User


def identity_for(user: User) -> TokenIdentity:
    return TokenIdentity(email=user.email, id=user.id)


async def authenticate(db: AsyncSession, email: str | None, password: str | None) -> User:
    """
    Check credentials and return the matching user.

    Raises:
        MissingParametersError: email or password absent (no lookup performed).
        UserNotFoundError: no account for the email.
        PasswordMismatchError: the password does not verify.
    """
    missing = [name for name, value in (("email", email), ("password", password)) if not value]
    if missing:
        raise MissingParametersError(missing)

    user = await get_user_by_email(db, email)
    if user is None:
        # Spend the same hashing time as a real check
        await verify_dummy_password_async(password)
        raise UserNotFoundError(email)

    if not await verify_password_async(password, user.password):
        raise PasswordMismatchError()

    return user


async def sign_in(
    db: AsyncSession,
    session: ServerSession | None,
    settings: Settings,
    email: str | None,
    password: str | None,
) -> SignInResult:
    """
    Authenticate, then establish a session and issue a bearer token.

    Both credentials are produced on every success; nothing is written to
    either on failure.
    """
    user = await authenticate(db, email, password)
    identity = identity_for(user)

    if session is not None:
        session.regenerate()
        session.set_user(identity.to_claim())

    token = create_access_token(identity, settings)
    logger.info("User signed in user_id=%s", user.id)
    return SignInResult(token=token, user=user)


def sign_out(session: ServerSession | None) -> None:
    """
    Clear the session identity.

    Bearer tokens issued earlier stay valid until they expire.
    """
    if session is not None:
        session.clear_user()


async def change_password(
    db: AsyncSession,
    identity: TokenIdentity,
    old_password: str | None,
    new_password: str | None,
) -> None:
    """
    Replace the caller's password after verifying the current one.

    Raises:
        MissingParametersError: either password absent.
        SamePasswordError: new equals old.
        PasswordMismatchError: old password does not verify (or the account is gone).

    Note:
        Commits before returning so the response reflects a durable write.
    """
    missing = [
        name
        for name, value in (("oldPassword", old_password), ("newPassword", new_password))
        if not value
    ]
    if missing:
        raise MissingParametersError(missing)
    if old_password == new_password:
        raise SamePasswordError()

    user = await get_user_by_email(db, identity.email)
    if user is None or not await verify_password_async(old_password, user.password):
        raise PasswordMismatchError()

    user.password = await hash_password_async(new_password)
    await db.commit()
    logger.info("Password updated user_id=%s", user.id)
