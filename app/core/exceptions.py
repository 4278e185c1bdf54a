"""Custom exception classes for error handling."""

from typing import Any


class ServiceException(Exception):
    """Base exception for errors rendered as an HTTP error envelope."""

    def __init__(
        self,
        message: str,
        error_type: str = "api_error",
        error_code: str | None = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_type = error_type
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the error envelope dictionary."""
        error_dict = {
            "message": self.message,
            "type": self.error_type,
        }

        if self.error_code:
            error_dict["code"] = self.error_code

        return {"error": error_dict}


class NotFoundError(ServiceException):
    """Requested route or resource does not exist."""

    def __init__(self, message: str = "Not Found", error_code: str = "not_found"):
        super().__init__(
            message=message,
            error_type="invalid_request_error",
            error_code=error_code,
            status_code=404,
        )


class ConfigError(Exception):
    """An environment value could not be parsed into its policy field.

    Raised (or collected) while resolving configuration at start-up; never
    produced while serving requests.
    """

    def __init__(self, variable: str, value: str, reason: str):
        self.variable = variable
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {variable}: {value!r} ({reason})")
