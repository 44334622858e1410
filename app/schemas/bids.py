from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import BidAuthorType, BidStatus


class BidCreateRequest(BaseModel):
    description: str = Field(default="", max_length=500)
    tenderId: str = Field(..., min_length=1)
    organizationId: str = Field(..., min_length=1)
    userId: str = Field(..., min_length=1)
    authorType: BidAuthorType = BidAuthorType.USER


class BidEditRequest(BaseModel):
    """Only these keys may be changed by the bid's author."""

    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = Field(default=None, max_length=500)
    authorType: Optional[BidAuthorType] = None


class BidResponse(BaseModel):
    id: str
    tenderId: str
    organizationId: str
    authorId: str
    authorType: BidAuthorType
    description: str
    status: BidStatus
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
