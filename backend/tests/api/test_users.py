"""Tests for /users/register and /users/login."""
from unittest.mock import patch

import jwt
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from core.security import verify_password
from models.user import Address, User
from tests.api.conftest import DEFAULT_PASSWORD, add_user

REGISTRATION = {
    "email": "Bob@Example.com ",
    "username": "bob",
    "password": "hunter2hunter2",
    "country": "France",
    "city": "Lyon",
    "street": "1 rue de la Paix",
}


async def _count(db_session: AsyncSession, model: type) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestRegister:
    """Tests for POST /users/register."""

    async def test__register__creates_user_and_address(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """A complete payload persists both rows and answers "User created"."""
        response = await client.post("/users/register", json=REGISTRATION)

        assert response.status_code == 200
        assert response.json() == {"message": "User created"}

        user = (await db_session.execute(select(User))).scalar_one()
        address = (await db_session.execute(select(Address))).scalar_one()
        assert user.email == "bob@example.com"
        assert user.username == "bob"
        assert address.email == "bob@example.com"
        assert address.country == "France"
        assert address.city == "Lyon"

    async def test__register__stores_bcrypt_hash_not_plaintext(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        await client.post("/users/register", json=REGISTRATION)

        user = (await db_session.execute(select(User))).scalar_one()
        assert user.password != REGISTRATION["password"]
        assert user.password.startswith("$2")
        assert verify_password(REGISTRATION["password"], user.password)

    async def test__register__optional_address_fields(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """City and street may be omitted."""
        payload = {k: REGISTRATION[k] for k in ("email", "username", "password", "country")}
        response = await client.post("/users/register", json=payload)

        assert response.status_code == 200
        address = (await db_session.execute(select(Address))).scalar_one()
        assert address.city is None
        assert address.street is None

    async def test__register__ignores_client_creation_date(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """creation_date is assigned by the server."""
        response = await client.post(
            "/users/register", json={**REGISTRATION, "creation_date": "1999-01-01"},
        )

        assert response.status_code == 200
        user = (await db_session.execute(select(User))).scalar_one()
        assert user.creation_date.year != 1999

    async def test__register__missing_country_returns_400(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        payload = {**REGISTRATION, "country": ""}
        response = await client.post("/users/register", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing parameters"}
        assert await _count(db_session, User) == 0

    async def test__register__no_body_returns_missing_parameters(
        self, client: AsyncClient,
    ) -> None:
        """An absent body is treated like an empty one."""
        response = await client.post("/users/register")

        assert response.status_code == 400
        assert response.json() == {"message": "Missing parameters"}

    async def test__register__missing_password_returns_400(self, client: AsyncClient) -> None:
        payload = {k: v for k, v in REGISTRATION.items() if k != "password"}
        response = await client.post("/users/register", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "Missing parameters"}

    async def test__register__existing_email_returns_409(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """Email comparison is case-insensitive after normalization."""
        await add_user(db_session, email="bob@example.com", username="original")

        response = await client.post("/users/register", json=REGISTRATION)

        assert response.status_code == 409
        assert response.json() == {"message": "User already has an account"}
        assert await _count(db_session, User) == 1
        assert await _count(db_session, Address) == 0

    async def test__register__address_failure_rolls_back_user(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """If the address insert fails, the user row is not left behind."""
        failure = OperationalError("INSERT INTO addresses", {}, Exception("boom"))
        with patch("services.user_service._insert_address", side_effect=failure):
            response = await client.post("/users/register", json=REGISTRATION)

        assert response.status_code == 500
        assert response.json() == {"message": "Exception occurred while registering"}
        assert await _count(db_session, User) == 0
        assert await _count(db_session, Address) == 0

    async def test__register__can_retry_after_rollback(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """A rolled-back attempt does not block a later registration of the same email."""
        failure = OperationalError("INSERT INTO addresses", {}, Exception("boom"))
        with patch("services.user_service._insert_address", side_effect=failure):
            await client.post("/users/register", json=REGISTRATION)

        response = await client.post("/users/register", json=REGISTRATION)

        assert response.status_code == 200
        assert await _count(db_session, User) == 1
        assert await _count(db_session, Address) == 1

    async def test__register__oversized_password_returns_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/users/register", json={**REGISTRATION, "password": "x" * 73},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Bad request"}


class TestUsersLogin:
    """Tests for POST /users/login."""

    async def test__login__returns_token_and_username(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        user = await add_user(db_session)

        response = await client.post(
            "/users/login", json={"email": "ALICE@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "alice"
        payload = jwt.decode(
            body["token"], get_settings().jwt_secret_key, algorithms=["HS256"],
        )
        assert payload["user"] == {"id": user.id, "email": "alice@example.com"}
        assert payload["exp"] - payload["iat"] == 3600

    async def test__login__sets_session_cookie(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        await add_user(db_session)

        response = await client.post(
            "/users/login", json={"email": "alice@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        assert "sid" in response.cookies
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie

    async def test__login__wrong_password_and_unknown_email_match(
        self, client: AsyncClient, db_session: AsyncSession,
    ) -> None:
        """Both credential failures produce an identical response."""
        await add_user(db_session)

        wrong_password = await client.post(
            "/users/login", json={"email": "alice@example.com", "password": "nope"},
        )
        unknown_email = await client.post(
            "/users/login", json={"email": "nobody@example.com", "password": "nope"},
        )

        assert wrong_password.status_code == unknown_email.status_code == 404
        assert wrong_password.json() == unknown_email.json() == {
            "message": "Incorrect email/password",
        }
        assert "sid" not in wrong_password.cookies

    async def test__login__missing_fields_returns_400(self, client: AsyncClient) -> None:
        response = await client.post("/users/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json() == {"message": "Missing parameters"}

    async def test__login__no_body_returns_400(self, client: AsyncClient) -> None:
        response = await client.post("/users/login")

        assert response.status_code == 400
        assert response.json() == {"message": "Missing parameters"}
