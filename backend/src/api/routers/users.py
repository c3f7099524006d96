"""Account registration and sign-in endpoints (relational flow)."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_request_session, get_settings
from core.config import Settings
from core.errors import ApiError
from core.sessions import ServerSession
from schemas.user import LoginRequest, LoginResponse, MessageResponse, RegisterRequest
from services import auth_service, user_service
from services.exceptions import (
    InvalidCredentialsError,
    MissingParametersError,
    RegistrationFailedError,
    UserAlreadyExistsError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=MessageResponse)
async def register(
    data: RegisterRequest = RegisterRequest(),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """
    Register a user and their address in one transaction.

    Requires email, username, password and country; city and street are optional.
    """
    try:
        await user_service.register_user(db, data)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    except UserAlreadyExistsError:
        raise ApiError(status.HTTP_409_CONFLICT, {"message": "User already has an account"})
    except RegistrationFailedError:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"message": "Exception occurred while registering"},
        )
    return MessageResponse(message="User created")


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest = LoginRequest(),
    db: AsyncSession = Depends(get_async_session),
    session: ServerSession | None = Depends(get_request_session),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """
    Sign in with email and password.

    Returns a one-hour bearer token and also stores the identity in the session.
    Unknown email and wrong password share one response.
    """
    try:
        result = await auth_service.sign_in(db, session, settings, data.email, data.password)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    except InvalidCredentialsError:
        raise ApiError(status.HTTP_404_NOT_FOUND, {"message": "Incorrect email/password"})
    except SQLAlchemyError:
        logger.exception("Login query failed")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while logging in"},
        )
    return LoginResponse(token=result.token, username=result.user.username)
