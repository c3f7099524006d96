"""Tests for Authorization header parsing and identity resolution."""
from unittest.mock import MagicMock

import pytest

from core.auth import get_current_identity, parse_bearer, verify_token
from core.config import Settings
from core.errors import ApiError
from core.security import TokenIdentity, create_access_token
from core.sessions import ServerSession


def _request(headers: dict[str, str] | None = None, session: ServerSession | None = None):
    request = MagicMock()
    request.headers = headers or {}
    request.state = MagicMock(spec=["session", "user"])
    request.state.session = session
    return request


class TestParseBearer:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("BEARER abc", "abc"),
            ("Bearer", None),
            ("Bearer ", None),
            ("Bearer a b", None),
            ("Basic abc", None),
            ("abc", None),
        ],
    )
    def test__parse_bearer(self, header: str, expected: str | None) -> None:
        assert parse_bearer(header) == expected


class TestVerifyToken:
    def test__verify_token__missing_header(self, settings: Settings) -> None:
        with pytest.raises(ApiError) as exc_info:
            verify_token(_request(), settings)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == {"error": "Unauthorized"}

    def test__verify_token__blank_header(self, settings: Settings) -> None:
        with pytest.raises(ApiError) as exc_info:
            verify_token(_request({"Authorization": "   "}), settings)

        assert exc_info.value.body == {"error": "Unauthorized"}

    def test__verify_token__invalid(self, settings: Settings) -> None:
        with pytest.raises(ApiError) as exc_info:
            verify_token(_request({"Authorization": "Bearer garbage"}), settings)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == {"error": "Invalid token"}

    def test__verify_token__attaches_identity(self, settings: Settings) -> None:
        identity = TokenIdentity(email="a@b.c", id=5)
        token = create_access_token(identity, settings)
        request = _request({"Authorization": f"Bearer {token}"})

        assert verify_token(request, settings) == identity
        assert request.state.user == identity


class TestGetCurrentIdentity:
    def test__session_user_wins(self, settings: Settings) -> None:
        session = ServerSession("sid", {"user": {"id": 2, "email": "s@b.c"}}, is_new=False)

        identity = get_current_identity(_request(session=session), settings)

        assert identity == TokenIdentity(email="s@b.c", id=2)

    def test__falls_back_to_bearer(self, settings: Settings) -> None:
        token = create_access_token(TokenIdentity(email="t@b.c", id=9), settings)
        request = _request({"Authorization": f"Bearer {token}"}, ServerSession("sid"))

        assert get_current_identity(request, settings).email == "t@b.c"

    def test__malformed_session_identity_ignored(self, settings: Settings) -> None:
        session = ServerSession("sid", {"user": {"id": "x"}}, is_new=False)

        with pytest.raises(ApiError) as exc_info:
            get_current_identity(_request(session=session), settings)

        assert exc_info.value.body == {"error": "You are not authenticated"}
