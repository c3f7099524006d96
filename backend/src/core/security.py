"""Password hashing and bearer token issuance/verification."""
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from core.config import Settings, get_settings


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, forged, or expired."""


@dataclass(frozen=True)
class TokenIdentity:
    """Identity claim carried by bearer tokens and sessions."""

    email: str
    id: int | None = None

    def to_claim(self) -> dict[str, Any]:
        """Serialize for the token's `user` claim and the session payload."""
        return {"id": self.id, "email": self.email}

    @classmethod
    def from_claim(cls, claim: Any) -> "TokenIdentity":
        """
        Parse a `user` claim.

        Raises:
            InvalidTokenError: If the claim is not an object with a string email
                and an optional integer id.
        """
        if not isinstance(claim, dict):
            raise InvalidTokenError("user claim must be an object")
        email = claim.get("email")
        user_id = claim.get("id")
        if not isinstance(email, str) or not email:
            raise InvalidTokenError("user claim is missing an email")
        if user_id is not None and (not isinstance(user_id, int) or isinstance(user_id, bool)):
            raise InvalidTokenError("user claim has a non-integer id")
        return cls(email=email, id=user_id)


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with bcrypt using a fresh random salt.

    bcrypt only considers the first 72 bytes; longer inputs are rejected by the
    library, so callers validate length first.
    """
    if not password:
        raise ValueError("password must not be empty")
    if rounds is None:
        rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a candidate password against a stored hash in constant time."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False


async def hash_password_async(password: str) -> str:
    """Hash on a worker thread so the event loop keeps serving requests."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    """Verify on a worker thread so the event loop keeps serving requests."""
    return await run_in_threadpool(verify_password, password, password_hash)


@lru_cache
def dummy_password_hash() -> str:
    """Hash compared against when the account does not exist, to even out timing."""
    return hash_password("not-a-real-password")


def _verify_against_dummy(password: str) -> None:
    verify_password(password, dummy_password_hash())


async def verify_dummy_password_async(password: str) -> None:
    """
    Spend one bcrypt check on a throwaway hash.

    Both the first-use hash and the check run on a worker thread.
    """
    await run_in_threadpool(_verify_against_dummy, password)


def create_access_token(
    identity: TokenIdentity,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """Sign a bearer token that expires `jwt_expires_seconds` after `now`."""
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(seconds=settings.jwt_expires_seconds)
    payload = {
        "user": identity.to_claim(),
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenIdentity:
    """
    Verify signature and expiry and return the embedded identity.

    Raises:
        InvalidTokenError: For any verification failure. Expired and forged
            tokens are not distinguished.
    """
    if not token:
        raise InvalidTokenError("token is empty")
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e
    return TokenIdentity.from_claim(payload.get("user"))
