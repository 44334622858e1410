from __future__ import annotations

import uuid
from typing import Any

from app.core.errors import BadRequestError


def parse_uuid(raw: Any, field: str) -> uuid.UUID:
    """
    Parse an identifier supplied by a caller.
    Raises BadRequestError so malformed ids never reach a store.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        raise BadRequestError(f"{field} must be UUID.")


def parse_positive_int(raw: Any, field: str) -> int:
    if isinstance(raw, bool):
        raise BadRequestError(f"{field} must be a positive integer.")
    try:
        value = int(str(raw), 10)
    except (TypeError, ValueError):
        raise BadRequestError(f"{field} must be a positive integer.")
    if value <= 0:
        raise BadRequestError(f"{field} must be a positive integer.")
    return value


def check_page(limit: int, offset: int) -> None:
    if limit is None or limit < 1:
        raise BadRequestError("limit must be >= 1.")
    if offset is None or offset < 0:
        raise BadRequestError("offset must be >= 0.")
