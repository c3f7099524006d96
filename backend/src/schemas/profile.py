"""Pydantic schemas for profile endpoints."""
from pydantic import BaseModel, ConfigDict, Field

from schemas.validators import OptionalPassword


class PasswordChangeRequest(BaseModel):
    """Body for PUT /profile. Accepts the camelCase names existing clients send."""

    model_config = ConfigDict(populate_by_name=True)

    old_password: OptionalPassword = Field(default=None, alias="oldPassword")
    new_password: OptionalPassword = Field(default=None, alias="newPassword")
