from __future__ import annotations

from typing import Any


class ActivatorError(Exception):
    """Base class for all errors surfaced by activation/reset operations.

    Every error carries the HTTP status code it maps to, so a response
    adapter can render it without knowing the concrete type.
    """

    status_code: int = 500
    default_message: str = "Internal Error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class CommonError(ActivatorError):
    """Generic error with a custom status code (store or transport failures)."""

    pass


class Uninitialized(ActivatorError):
    """Operation invoked before the activator was configured."""

    status_code = 500
    default_message = "Activator Uninitialized"


class BadRequest(ActivatorError):
    """Missing or invalid input, mismatched or expired reset code."""

    status_code = 400
    default_message = "Bad Request"


class Forbidden(ActivatorError):
    """Activation code mismatch."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(ActivatorError):
    """No user record matches the lookup."""

    status_code = 404
    default_message = "Not Found"


class RateLimited(ActivatorError):
    """Issuance denied by the throttle hook."""

    status_code = 429
    default_message = "Too Many Requests"


class MailTransportError(CommonError):
    status_code = 502
    default_message = "Couldn't send email"


class TemplateNotFound(CommonError):
    status_code = 500
    default_message = "Template Not Found"
