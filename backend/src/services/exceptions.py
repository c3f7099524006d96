"""Shared exceptions for service layer operations."""


class MissingParametersError(Exception):
    """Raised when a required field is absent; no I/O has been attempted."""

    def __init__(self, fields: list[str]) -> None:
        self.fields = fields
        super().__init__(f"Missing parameters: {', '.join(fields)}")


class UserAlreadyExistsError(Exception):
    """Raised when an email is already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User already exists: {email}")


class RegistrationFailedError(Exception):
    """
    Raised when the registration transaction fails for any other reason.

    The transaction has been rolled back before this is raised.
    """

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Registration failed for {email}")


class InvalidCredentialsError(Exception):
    """Base exception for sign-in credential failures."""


class UserNotFoundError(InvalidCredentialsError):
    """Raised when no account matches the email."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"No user with email {email}")


class PasswordMismatchError(InvalidCredentialsError):
    """Raised when the password does not match the stored hash."""

    def __init__(self) -> None:
        super().__init__("Password does not match")


class SamePasswordError(Exception):
    """Raised when a password change reuses the current password."""

    def __init__(self) -> None:
        super().__init__("New password cannot be equal to old password")


class MovieNotFoundError(Exception):
    """Raised when a movie id does not exist."""

    def __init__(self, movie_id: int) -> None:
        self.movie_id = movie_id
        super().__init__(f"Movie not found: {movie_id}")


class InvalidRatingError(Exception):
    """Raised when a rating falls outside the accepted range."""

    def __init__(self, rating: float, minimum: float, maximum: float) -> None:
        self.rating = rating
        super().__init__(f"Rating must be between {minimum:g} and {maximum:g}")


class MessageNotFoundError(Exception):
    """Raised when a message does not exist or belongs to another user."""

    def __init__(self, message_id: int) -> None:
        self.message_id = message_id
        super().__init__(f"Message not found: {message_id}")
