"""
Domain errors raised by services and stores.

They carry no HTTP knowledge; app.api.errors maps each kind to a status
code. Anything that is not a DomainError (SQLAlchemy errors, I/O failures)
is an internal failure and is left to propagate.
"""
from __future__ import annotations


class DomainError(Exception):
    """Base for all business-rule failures."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(DomainError):
    """Malformed identifier or missing/invalid input."""

    default_message = "Invalid request"


class UserNotFoundError(DomainError):
    """Username or user id does not resolve to an employee."""

    default_message = "User not found"


class ForbiddenError(DomainError):
    """Identity resolved but lacks permission for the target entity."""

    default_message = "Insufficient permissions"


class TenderNotFoundError(DomainError):
    default_message = "Tender not found"


class TenderHistoryNotFoundError(DomainError):
    """No snapshot recorded for the requested (tender, version)."""

    default_message = "Tender version not found"


class BidNotFoundError(DomainError):
    default_message = "Bid not found"
