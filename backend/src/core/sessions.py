"""
Server-side sessions stored in Redis and keyed by an opaque cookie.

A session holds at most the signed-in user's identity. It is a convenience
alongside bearer tokens, not an authority: clearing it on logout does not
revoke tokens that were issued with it.
"""
import logging
import secrets
from typing import TYPE_CHECKING, Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

if TYPE_CHECKING:
    from core.redis import RedisClient

logger = logging.getLogger(__name__)

# Bump when the stored payload shape changes; old entries are then ignored and expire.
SESSION_SCHEMA_VERSION = 1


class SessionStore:
    """Load/save session payloads as JSON in Redis with a sliding TTL."""

    def __init__(self, redis_client: "RedisClient", ttl_seconds: int) -> None:
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def new_session_id() -> str:
        """Generate an unguessable session identifier."""
        return secrets.token_urlsafe(32)

    def _key(self, session_id: str) -> str:
        return f"session:v{SESSION_SCHEMA_VERSION}:{session_id}"

    async def load(self, session_id: str) -> dict[str, Any] | None:
        """Return the stored payload, or None when missing, expired, or unreadable."""
        data = await self._redis.get_json(self._key(session_id))
        if not isinstance(data, dict):
            return None
        return data

    async def save(self, session_id: str, data: dict[str, Any]) -> bool:
        """Persist the payload and refresh its TTL."""
        return await self._redis.set_json(self._key(session_id), data, self.ttl_seconds)

    async def destroy(self, session_id: str) -> bool:
        """Remove a session entirely."""
        return await self._redis.delete(self._key(session_id))


class ServerSession:
    """Per-request view of a session; the middleware persists it if modified."""

    def __init__(
        self,
        session_id: str,
        data: dict[str, Any] | None = None,
        *,
        is_new: bool = True,
    ) -> None:
        self.session_id = session_id
        self.data: dict[str, Any] = data or {}
        self.is_new = is_new
        self.modified = False
        self.previous_id: str | None = None

    @property
    def user(self) -> dict[str, Any] | None:
        """Identity stored by sign-in, if any."""
        user = self.data.get("user")
        return user if isinstance(user, dict) else None

    def set_user(self, user: dict[str, Any]) -> None:
        self.data["user"] = dict(user)
        self.modified = True

    def clear_user(self) -> None:
        if "user" in self.data:
            del self.data["user"]
            self.modified = True

    def regenerate(self) -> None:
        """Move the session to a fresh id (called on sign-in to prevent fixation)."""
        if not self.is_new:
            self.previous_id = self.session_id
        self.session_id = SessionStore.new_session_id()
        self.is_new = True
        self.modified = True


class SessionMiddleware(BaseHTTPMiddleware):
    """Attach a ServerSession to request.state and persist it after the handler."""

    def __init__(
        self,
        app: ASGIApp,
        cookie_name: str = "sid",
        secure: bool = False,
    ) -> None:
        super().__init__(app)
        self.cookie_name = cookie_name
        self.secure = secure

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Load the session, run the handler, then save and set the cookie."""
        store = get_session_store()
        cookie_value = request.cookies.get(self.cookie_name)

        data = None
        if cookie_value and store is not None:
            data = await store.load(cookie_value)

        if data is None:
            # Unknown or expired ids are never reused
            session = ServerSession(SessionStore.new_session_id(), is_new=True)
        else:
            session = ServerSession(cookie_value, data, is_new=False)
        request.state.session = session

        response = await call_next(request)

        if not session.modified:
            return response
        if store is None:
            logger.debug("Session store unavailable; session change not persisted")
            return response

        if session.previous_id:
            await store.destroy(session.previous_id)
        if await store.save(session.session_id, session.data):
            response.set_cookie(
                self.cookie_name,
                session.session_id,
                max_age=store.ttl_seconds,
                httponly=True,
                secure=self.secure,
                samesite="lax",
            )
        return response


def get_request_session(request: Request) -> ServerSession | None:
    """Dependency returning the current request's session, if middleware is installed."""
    return getattr(request.state, "session", None)


# Global session store state using a container to avoid global statement
class _SessionState:
    """Container for global session store state."""

    store: SessionStore | None = None


_state = _SessionState()


def get_session_store() -> SessionStore | None:
    """Get the global session store instance."""
    return _state.store


def set_session_store(store: SessionStore | None) -> None:
    """Set the global session store instance."""
    _state.store = store
