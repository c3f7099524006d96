"""FastAPI dependencies for injection."""
from core.auth import get_current_identity, verify_token
from core.config import get_settings
from core.sessions import get_request_session
from db.session import get_async_session

__all__ = [
    "get_async_session",
    "get_current_identity",
    "get_request_session",
    "get_settings",
    "verify_token",
]
