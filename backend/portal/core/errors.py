# portal/core/errors.py
"""
Error taxonomy for the portal backend.

Credential and validation failures normally travel as result objects up to
the routers; the classes below are what gets raised when a failure has to
cross a layer boundary (store adapter, token codec, guards). Each class
carries the HTTP status and the generic public message the route boundary
should emit, so handlers never leak internal details.
"""


class PortalError(Exception):
    """Base class for all portal errors."""

    status_code: int = 500
    public_message: str = "Server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ConfigurationError(PortalError):
    """Required configuration (e.g. the session secret) is missing."""

    status_code = 500
    public_message = "Server misconfigured"


class InvalidCredentials(PortalError):
    """Login failed. Always carries the same generic message."""

    status_code = 401
    public_message = "Invalid username or password"


class ValidationError(PortalError):
    """Signup or update input is malformed; the message names the field."""

    status_code = 400
    public_message = "Invalid request"


class ConflictError(PortalError):
    """Uniqueness violation on username or email."""

    status_code = 400
    public_message = "Username or email already exists"


class InvalidToken(PortalError):
    """Session token has a bad signature, is malformed or expired."""

    status_code = 401
    public_message = "Unauthorized"


class StoreError(PortalError):
    """The store is unreachable or an operation failed."""

    status_code = 500
    public_message = "Server error"
