"""Tests for user messages."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import TokenIdentity
from services import message_service
from services.exceptions import MessageNotFoundError, MissingParametersError, UserNotFoundError
from tests.api.conftest import add_user


async def test__add_message__owner_resolved_from_identity(db_session: AsyncSession) -> None:
    user = await add_user(db_session)

    message = await message_service.add_message(
        db_session, TokenIdentity(email=user.email), "hello",
    )

    assert message.user_id == user.id
    assert message.updated_at is not None
    assert not db_session.in_transaction()


async def test__add_message__requires_name(db_session: AsyncSession) -> None:
    with pytest.raises(MissingParametersError):
        await message_service.add_message(db_session, TokenIdentity(email="a@b.c"), None)


async def test__add_message__unknown_account(db_session: AsyncSession) -> None:
    with pytest.raises(UserNotFoundError):
        await message_service.add_message(db_session, TokenIdentity(email="a@b.c"), "hi")


async def test__rename_message__only_owner(db_session: AsyncSession) -> None:
    alice = await add_user(db_session)
    await add_user(db_session, email="bob@example.com", username="bob")
    message = await message_service.add_message(
        db_session, TokenIdentity(email=alice.email), "draft",
    )

    with pytest.raises(MessageNotFoundError):
        await message_service.rename_message(
            db_session, TokenIdentity(email="bob@example.com"), message.id, "stolen",
        )

    renamed = await message_service.rename_message(
        db_session, TokenIdentity(email=alice.email), message.id, "final",
    )
    assert renamed.name == "final"


async def test__delete_message__removes_row(db_session: AsyncSession) -> None:
    user = await add_user(db_session)
    identity = TokenIdentity(email=user.email)
    message = await message_service.add_message(db_session, identity, "bye")

    await message_service.delete_message(db_session, identity, message.id)

    with pytest.raises(MessageNotFoundError):
        await message_service.get_message(db_session, message.id)
    assert await message_service.list_messages(db_session) == []


async def test__delete_message__unknown_id(db_session: AsyncSession) -> None:
    user = await add_user(db_session)

    with pytest.raises(MessageNotFoundError):
        await message_service.delete_message(db_session, TokenIdentity(email=user.email), 99)
