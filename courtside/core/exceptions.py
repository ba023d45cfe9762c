"""Error taxonomy for the league API.

Services and the auth gate raise these; ``courtside.api.errors`` renders them
into the ``{success: false, message, errors?}`` envelope.
"""
from typing import Any, Optional


class CourtsideError(Exception):
    """Base class for errors that map onto an HTTP status."""
    
    status_code = 500
    
    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors
    
    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationFailed(CourtsideError):
    """Malformed input, or a referenced document in a request body is missing."""
    status_code = 400


class ConflictError(CourtsideError):
    """A unique field is already taken."""
    status_code = 400


class NotAuthenticated(CourtsideError):
    status_code = 401


class ForbiddenError(CourtsideError):
    """Role or ownership check failed."""
    status_code = 403


class NotFoundError(CourtsideError):
    status_code = 404
