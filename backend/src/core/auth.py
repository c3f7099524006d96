"""Bearer token verification and session-or-token identity resolution."""
import logging

from fastapi import Depends, Request, status

from core.config import Settings, get_settings
from core.errors import ApiError
from core.security import InvalidTokenError, TokenIdentity, decode_access_token
from core.sessions import get_request_session

logger = logging.getLogger(__name__)

WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


def _unauthorized(error: str) -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, {"error": error}, headers=WWW_AUTHENTICATE)


def parse_bearer(header: str) -> str | None:
    """Return the token from `Bearer <token>`, or None if the header is malformed."""
    parts = header.split(" ")
    if len(parts) != 2:
        return None
    scheme, token = parts
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def _identity_from_header(header: str, settings: Settings) -> TokenIdentity:
    token = parse_bearer(header.strip())
    if token is None:
        logger.warning("Rejected malformed Authorization header")
        raise _unauthorized("Invalid token")
    try:
        return decode_access_token(token, settings)
    except InvalidTokenError as e:
        # Detail stays server-side; expired and forged look the same to clients
        logger.warning("Token verification failed: %s", e)
        raise _unauthorized("Invalid token") from e


def verify_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenIdentity:
    """
    Gatekeep a protected route with the `Authorization: Bearer <token>` header.

    On success the decoded identity is stored on `request.state.user` and
    returned; otherwise the request stops with 401.
    """
    header = request.headers.get("Authorization")
    if not header or not header.strip():
        raise _unauthorized("Unauthorized")

    identity = _identity_from_header(header, settings)
    request.state.user = identity
    return identity


def get_current_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenIdentity:
    """
    Resolve the caller from the session first, then from a bearer token.

    The two mechanisms are independent: either one alone authenticates.
    """
    session = get_request_session(request)
    if session is not None and session.user is not None:
        try:
            identity = TokenIdentity.from_claim(session.user)
        except InvalidTokenError:
            logger.warning("Ignoring session with malformed identity")
        else:
            request.state.user = identity
            return identity

    header = request.headers.get("Authorization")
    if not header or not header.strip():
        raise _unauthorized("You are not authenticated")

    identity = _identity_from_header(header, settings)
    request.state.user = identity
    return identity
