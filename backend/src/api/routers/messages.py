"""Message endpoints (bearer token required, enforced at router registration)."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, verify_token
from core.errors import ApiError
from core.security import TokenIdentity
from schemas.message import MessageCreateRequest, MessageItemResponse, MessageUpdateRequest
from schemas.user import MessageResponse
from services import message_service
from services.exceptions import MessageNotFoundError, MissingParametersError, UserNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])

MISSING_INFORMATION = {"error": "missing information"}
NOT_FOUND = {"error": "Message not found"}


def _not_authenticated() -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, {"error": "You are not authenticated"})


@router.get("", response_model=list[MessageItemResponse])
async def list_messages(
    db: AsyncSession = Depends(get_async_session),
) -> list[MessageItemResponse]:
    try:
        messages = await message_service.list_messages(db)
    except SQLAlchemyError:
        logger.exception("Failed to list messages")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Error while getting messages"},
        )
    return [MessageItemResponse.model_validate(m) for m in messages]


@router.post("/add/message", response_model=MessageItemResponse)
async def add_message(
    data: MessageCreateRequest = MessageCreateRequest(),
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageItemResponse:
    """Create a message owned by the caller."""
    name = data.message.name if data.message is not None else None
    try:
        message = await message_service.add_message(db, identity, name)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, MISSING_INFORMATION)
    except UserNotFoundError:
        raise _not_authenticated()
    except SQLAlchemyError:
        logger.exception("Failed to add message")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Failed to add message"})
    return MessageItemResponse.model_validate(message)


@router.put("/edit/{message_id}", response_model=MessageItemResponse)
async def edit_message(
    message_id: int,
    data: MessageUpdateRequest = MessageUpdateRequest(),
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageItemResponse:
    """Rename one of the caller's messages."""
    try:
        message = await message_service.rename_message(db, identity, message_id, data.name)
    except MissingParametersError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, MISSING_INFORMATION)
    except MessageNotFoundError:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except UserNotFoundError:
        raise _not_authenticated()
    except SQLAlchemyError:
        logger.exception("Failed to update message message_id=%s", message_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Failed to update message"},
        )
    return MessageItemResponse.model_validate(message)


@router.delete("/delete/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: int,
    identity: TokenIdentity = Depends(verify_token),
    db: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    """Delete one of the caller's messages."""
    try:
        await message_service.delete_message(db, identity, message_id)
    except MessageNotFoundError:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except UserNotFoundError:
        raise _not_authenticated()
    except SQLAlchemyError:
        logger.exception("Failed to delete message message_id=%s", message_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Failed to delete message"},
        )
    return MessageResponse(message="Message deleted")


@router.get("/{message_id}", response_model=MessageItemResponse)
async def get_message(
    message_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> MessageItemResponse:
    try:
        message = await message_service.get_message(db, message_id)
    except MessageNotFoundError:
        raise ApiError(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Failed to get message message_id=%s", message_id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Error while getting message"},
        )
    return MessageItemResponse.model_validate(message)
