"""HTTP error type rendered as a JSON body by the application's exception handler."""
from typing import Any


class ApiError(Exception):
    """
    Error with an explicit status code and JSON body.

    Bodies keep the message/error keys clients already rely on, e.g.
    `{"message": "Missing parameters"}` or `{"error": "Invalid token"}`.
    """

    def __init__(
        self,
        status_code: int,
        body: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.headers = headers
        super().__init__(f"{status_code}: {body}")
