"""Error taxonomy for inquiry intake."""


class InquiryError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(InquiryError):
    """The submitted payload failed validation. Carries every error string."""

    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__()


class AuthError(InquiryError):
    """Missing, malformed, invalid, or expired credential."""

    status_code = 401
    message = "Invalid or expired token"


class PersistenceError(InquiryError):
    """The record store was unavailable or rejected a read or write."""

    status_code = 500

    def __init__(self, message: str, detail: str = "") -> None:
        self.detail = detail or message
        super().__init__(message)


class NotificationError(InquiryError):
    """The notifier failed to deliver. Captured, never surfaced as a failed request."""

    status_code = 200

    def __init__(self, message: str, response: str | None = None) -> None:
        self.response = response
        super().__init__(message)


class InternalError(InquiryError):
    """Any uncaught condition. Detail is logged, never returned."""

    status_code = 500
    message = "Server error"
