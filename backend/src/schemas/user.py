"""Pydantic schemas for registration, sign-in and user endpoints."""
from datetime import date

from pydantic import BaseModel, ConfigDict

from schemas.validators import OptionalEmail, OptionalPassword, OptionalText


class RegisterRequest(BaseModel):
    """
    Body for POST /users/register.

    Every field is optional at the schema level; the registration flow reports
    missing required fields itself. Unknown fields (including any
    client-supplied creation_date) are ignored.
    """

    email: OptionalEmail = None
    username: OptionalText = None
    password: OptionalPassword = None
    country: OptionalText = None
    city: OptionalText = None
    street: OptionalText = None


class SignupRequest(BaseModel):
    """Body for POST /auth/signup."""

    username: OptionalText = None
    email: OptionalEmail = None
    password: OptionalPassword = None


class LoginRequest(BaseModel):
    """Body for POST /users/login and POST /auth/login."""

    email: OptionalEmail = None
    password: OptionalPassword = None


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    creation_date: date


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """Response of POST /users/login."""

    token: str
    username: str


class TokenResponse(BaseModel):
    """Response of POST /auth/login."""

    token: str
