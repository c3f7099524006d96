"""Profile endpoints: password change and logout."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_request_session, verify_token
from core.errors import ApiError
from core.security import TokenIdentity
from core.sessions import ServerSession
from schemas.profile import PasswordChangeRequest
from schemas.user import MessageResponse
from services import auth_service
from services.exceptions import MissingParametersError, PasswordMismatchError, SamePasswordError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.put("", response_model=MessageResponse)
async def edit_password(
    data: PasswordChangeRequest = PasswordChangeRequest(),
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Change the caller's password (requires the current one)."""
    try:
        await auth_service.change_password(
            db, identity, data.old_password, data.new_password,
        )
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Missing parameters"})
    except SamePasswordError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": str(e)})
    except PasswordMismatchError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, {"message": "Incorrect password"})
    except SQLAlchemyError:
        logger.exception("Failed to update password")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Exception occurred while updating password"},
        )
    return MessageResponse(message="Password updated")


@router.post("", response_model=MessageResponse)
async def logout(
    session: ServerSession | None = Depends(get_request_session),
) -> MessageResponse:
    """Clear the session identity."""
    auth_service.sign_out(session)
    return MessageResponse(message="Disconnected")
