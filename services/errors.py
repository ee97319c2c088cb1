# services/errors.py
"""
Domain errors raised by the services and mapped to HTTP responses in main.py.

Every error carries the status code and the message returned to the client,
so handlers never build error bodies themselves.
"""


class DrillTrackerError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(DrillTrackerError):
    status_code = 400
    default_message = "Missing required fields"


class InvalidCredentials(DrillTrackerError):
    status_code = 400
    default_message = "Invalid credentials"


class Unauthorized(DrillTrackerError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidToken(DrillTrackerError):
    """Raised by the token codec; the guard turns it into Unauthorized."""
    status_code = 401
    default_message = "Invalid token"


class Forbidden(DrillTrackerError):
    status_code = 403
    default_message = "Access denied"


class NotFound(DrillTrackerError):
    status_code = 404
    default_message = "Not found"


class Conflict(DrillTrackerError):
    status_code = 400
    default_message = "Conflict"


class StaleAccount(DrillTrackerError):
    """The stored account changed between read and save."""
    status_code = 409
    default_message = "Account was modified concurrently, please retry"
