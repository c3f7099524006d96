"""Pydantic schemas for messages."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from schemas.validators import OptionalText


class MessageFields(BaseModel):
    name: OptionalText = None


class MessageCreateRequest(BaseModel):
    """
    Body for POST /messages/add/message.

    The message is wrapped, e.g. `{"message": {"name": "hello"}}`. Any owner
    sent by the client is ignored; the owner is the authenticated caller.
    """

    message: MessageFields | None = None


class MessageUpdateRequest(BaseModel):
    """Body for PUT /messages/edit/{message_id}."""

    name: OptionalText = None


class MessageItemResponse(BaseModel):
    """A stored message."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    user_id: int
    created_at: datetime
    updated_at: datetime
