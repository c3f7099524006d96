"""Session-oriented auth endpoints: signup, login, me, logout."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_current_identity,
    get_request_session,
    get_settings,
)
from core.config import Settings
from core.errors import ApiError
from core.security import TokenIdentity
from core.sessions import ServerSession
from schemas.user import (
    LoginRequest,
    MessageResponse,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from services import auth_service, user_service
from services.exceptions import (
    MissingParametersError,
    PasswordMismatchError,
    RegistrationFailedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse)
async def signup(
    data: SignupRequest = SignupRequest(),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Create an account (no address) and return it without the password."""
    try:
        user = await user_service.create_account(db, data.email, data.username, data.password)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"error": "missing information"})
    except UserAlreadyExistsError:
        raise ApiError(status.HTTP_409_CONFLICT, {"message": "User already has an account"})
    except RegistrationFailedError:
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, {"message": "failed to save user"})
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest = LoginRequest(),
    db: AsyncSession = Depends(get_async_session),
    session: ServerSession | None = Depends(get_request_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """
    Sign in and return a bearer token; the session is populated as well.

    Unknown email and wrong password are reported separately on this route.
    """
    try:
        result = await auth_service.sign_in(db, session, settings, data.email, data.password)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"error": "missing information"})
    except UserNotFoundError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "User not found"})
    except PasswordMismatchError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Email or password don't match"})
    except SQLAlchemyError:
        logger.exception("Error while getting user from DB")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Failed to get user"})
    return TokenResponse(token=result.token)


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Return the signed-in user, identified by session or bearer token."""
    try:
        user = await user_service.get_user_by_email(db, identity.email)
    except SQLAlchemyError:
        logger.exception("Error while getting user from DB")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Failed to get user"})
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, {"message": "User not found"})
    return UserResponse.model_validate(user)


@router.get("/logout", response_model=MessageResponse)
async def logout(
    session: ServerSession | None = Depends(get_request_session),
) -> MessageResponse:
    """Clear the session. Outstanding bearer tokens remain valid until expiry."""
    auth_service.sign_out(session)
    return MessageResponse(message="Disconnected")
