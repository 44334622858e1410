from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    username: str
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class ErrorResponse(BaseModel):
    reason: str
