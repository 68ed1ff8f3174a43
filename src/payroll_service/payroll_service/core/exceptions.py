from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """An error the API reports as ``{"success": false, "error": message}``.

    Subclasses only pick the HTTP status; ``details`` rides along in the
    envelope when set (missing field names, unknown ids).
    """

    status_code = 400

    def __init__(self, message: str, *, details: Optional[list[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, status={self.status_code})"


class ValidationError(DomainError):
    pass


class NotFoundError(DomainError):
    status_code = 404


class AuthorizationError(DomainError):
    """Wrong or missing payout PIN."""

    status_code = 403
