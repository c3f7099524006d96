"""Service layer for user messages."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import TokenIdentity
from models.message import Message
from services.exceptions import MessageNotFoundError, MissingParametersError, UserNotFoundError
from services.user_service import get_user_by_email

logger = logging.getLogger(__name__)


async def list_messages(db: AsyncSession) -> list[Message]:
    result = await db.execute(select(Message).order_by(Message.id))
    return list(result.scalars().all())


async def get_message(db: AsyncSession, message_id: int) -> Message:
    """
    Raises:
        MessageNotFoundError: no message with that id.
    """
    message = await db.get(Message, message_id)
    if message is None:
        raise MessageNotFoundError(message_id)
    return message


async def _get_owned_message(
    db: AsyncSession, owner_id: int, message_id: int,
) -> Message:
    # Another user's message is reported exactly like a missing one
    message = await db.get(Message, message_id)
    if message is None or message.user_id != owner_id:
        raise MessageNotFoundError(message_id)
    return message


async def _owner_id(db: AsyncSession, identity: TokenIdentity) -> int:
    user = await get_user_by_email(db, identity.email)
    if user is None:
        raise UserNotFoundError(identity.email)
    return user.id


async def add_message(db: AsyncSession, identity: TokenIdentity, name: str | None) -> Message:
    """
    Create a message owned by the caller and commit it.

    Raises:
        MissingParametersError: name absent.
        UserNotFoundError: the token's account no longer exists.
    """
    if not name:
        raise MissingParametersError(["name"])
    message = Message(name=name, user_id=await _owner_id(db, identity))
    db.add(message)
    await db.commit()
    await db.refresh(message)
    logger.info("Message added message_id=%s user_id=%s", message.id, message.user_id)
    return message


async def rename_message(
    db: AsyncSession,
    identity: TokenIdentity,
    message_id: int,
    name: str | None,
) -> Message:
    """
    Change a message's name. Only the owner may edit it.

    Raises:
        MissingParametersError: name absent.
        MessageNotFoundError: unknown id, or owned by someone else.
        UserNotFoundError: the token's account no longer exists.
    """
    if not name:
        raise MissingParametersError(["name"])
    message = await _get_owned_message(db, await _owner_id(db, identity), message_id)
    message.name = name
    await db.commit()
    await db.refresh(message)
    return message


async def delete_message(db: AsyncSession, identity: TokenIdentity, message_id: int) -> None:
    """
    Delete one of the caller's messages.

    Raises:
        MessageNotFoundError: unknown id, or owned by someone else.
        UserNotFoundError: the token's account no longer exists.
    """
    message = await _get_owned_message(db, await _owner_id(db, identity), message_id)
    await db.delete(message)
    await db.commit()
    logger.info("Message deleted message_id=%s", message_id)
