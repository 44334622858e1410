"""
Store contracts consumed by the lifecycle services.

Services depend on these abstract classes only; app.api.deps wires the
SQLAlchemy implementations in per request, tests wire in-memory fakes.
Not-found conditions are raised as domain errors, storage failures are not
translated.
"""
from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

from app.models.bid import Bid, BidFeedback
from app.models.enums import BidAuthorType, BidStatus, TenderStatus
from app.models.tender import Tender, TenderHistory
from app.models.user import User


# columns a rollback/edit/status change may write on a tender
TENDER_MUTABLE_FIELDS = ("name", "description", "service_type", "status")

# columns a bid author may rewrite through edit_bid
BID_EDITABLE_FIELDS = ("description", "author_type")


@dataclass(frozen=True)
class TenderDraft:
    name: str
    description: str
    service_type: str
    status: TenderStatus
    organization_id: uuid.UUID
    creator_id: Optional[uuid.UUID] = None


@dataclass(frozen=True)
class TenderPatch:
    """Partial update of a live tender; None means "leave as is"."""

    name: Optional[str] = None
    description: Optional[str] = None
    service_type: Optional[str] = None
    status: Optional[TenderStatus] = None

    def changes(self) -> Dict[str, Any]:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and f.name in TENDER_MUTABLE_FIELDS:
                out[f.name] = value.value if isinstance(value, TenderStatus) else value
        return out

    def is_empty(self) -> bool:
        return not self.changes()


@dataclass(frozen=True)
class BidPatch:
    description: Optional[str] = None
    author_type: Optional[BidAuthorType] = None

    def changes(self) -> Dict[str, Any]:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and f.name in BID_EDITABLE_FIELDS:
                out[f.name] = value.value if isinstance(value, BidAuthorType) else value
        return out

    def is_empty(self) -> bool:
        return not self.changes()


class UserDirectory(ABC):
    @abstractmethod
    def resolve_user_id(self, username: str) -> uuid.UUID:
        """Raises UserNotFoundError."""

    @abstractmethod
    def get_by_username(self, username: str) -> User:
        """Raises UserNotFoundError."""

    @abstractmethod
    def get_by_id(self, user_id: uuid.UUID) -> User:
        """Raises UserNotFoundError."""

    @abstractmethod
    def is_organization_responsible(
        self, user_id: uuid.UUID, organization_id: uuid.UUID
    ) -> bool: ...

    @abstractmethod
    def list_users(self) -> List[User]: ...


class TenderStore(ABC):
    @abstractmethod
    def get(self, tender_id: uuid.UUID) -> Tender:
        """Raises TenderNotFoundError."""

    @abstractmethod
    def create(self, draft: TenderDraft) -> Tender: ...

    @abstractmethod
    def update_status(self, tender: Tender, status: TenderStatus) -> Tender:
        """Snapshot the prior state into history, apply, bump version."""

    @abstractmethod
    def update_fields(self, tender: Tender, patch: TenderPatch) -> Tender:
        """Snapshot the prior state into history, apply, bump version."""

    @abstractmethod
    def get_history(self, tender_id: uuid.UUID, version: int) -> TenderHistory:
        """Raises TenderHistoryNotFoundError."""

    @abstractmethod
    def list_by_service_type(self, service_type: Optional[str]) -> List[Tender]: ...

    @abstractmethod
    def list_by_creator_username(self, username: str) -> List[Tender]: ...


class BidStore(ABC):
    @abstractmethod
    def get(self, bid_id: uuid.UUID) -> Bid:
        """Raises BidNotFoundError."""

    @abstractmethod
    def create(
        self,
        *,
        description: str,
        tender_id: uuid.UUID,
        organization_id: uuid.UUID,
        user_id: uuid.UUID,
        author_type: BidAuthorType,
        status: BidStatus,
    ) -> Bid: ...

    @abstractmethod
    def update_status(self, bid: Bid, status: BidStatus) -> Bid: ...

    @abstractmethod
    def update_fields(self, bid: Bid, patch: BidPatch) -> Bid: ...

    @abstractmethod
    def list_by_tender(self, tender_id: uuid.UUID, limit: int, offset: int) -> List[Bid]: ...

    @abstractmethod
    def list_by_user(self, user_id: uuid.UUID, limit: int, offset: int) -> List[Bid]: ...

    @abstractmethod
    def append_feedback(self, bid: Bid, text: str) -> BidFeedback: ...
