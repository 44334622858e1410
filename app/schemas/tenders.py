#app/schemas/tenders.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import TenderStatus


class TenderCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    serviceType: str = Field(default="", max_length=64)
    status: TenderStatus = TenderStatus.CREATED
    organizationId: str = Field(..., min_length=1)
    creatorUsername: str = Field(..., min_length=1)


class TenderEditRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    serviceType: Optional[str] = Field(default=None, max_length=64)


class TenderResponse(BaseModel):
    id: str
    name: str
    description: str
    serviceType: str
    status: TenderStatus
    organizationId: str
    creatorId: str
    version: int
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
