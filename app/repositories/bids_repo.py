from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.errors import BidNotFoundError
from app.models.bid import Bid, BidFeedback
from app.models.enums import BidAuthorType, BidStatus
from app.repositories.base import BidPatch, BidStore


def _now():
    return datetime.now(timezone.utc)


class SqlBidStore(BidStore):
    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, bid_id: uuid.UUID) -> Bid:
        bid = self.db.get(Bid, bid_id)
        if not bid:
            raise BidNotFoundError(f"Bid {bid_id} not found.")
        return bid

    def create(
        self,
        *,
        description: str,
        tender_id: uuid.UUID,
        organization_id: uuid.UUID,
        user_id: uuid.UUID,
        author_type: BidAuthorType,
        status: BidStatus,
    ) -> Bid:
        now = _now()
        bid = Bid(
            description=description,
            tender_id=tender_id,
            organization_id=organization_id,
            user_id=user_id,
            author_type=author_type.value,
            status=status.value,
            created_at=now,
            updated_at=now,
        )
        self.db.add(bid)
        self.db.commit()
        self.db.refresh(bid)
        return bid

    def update_status(self, bid: Bid, status: BidStatus) -> Bid:
        bid.status = status.value
        return self._save(bid)

    def update_fields(self, bid: Bid, patch: BidPatch) -> Bid:
        for key, value in patch.changes().items():
            setattr(bid, key, value)
        return self._save(bid)

    def list_by_tender(self, tender_id: uuid.UUID, limit: int, offset: int) -> List[Bid]:
        stmt = (
            select(Bid)
            .where(Bid.tender_id == tender_id)
            .order_by(Bid.created_at, Bid.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_by_user(self, user_id: uuid.UUID, limit: int, offset: int) -> List[Bid]:
        stmt = (
            select(Bid)
            .where(Bid.user_id == user_id)
            .order_by(Bid.description, Bid.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(stmt).scalars().all())

    def append_feedback(self, bid: Bid, text: str) -> BidFeedback:
        row = BidFeedback(bid_id=bid.id, description=text, created_at=_now())
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def _save(self, bid: Bid) -> Bid:
        bid.updated_at = _now()
        self.db.add(bid)
        self.db.commit()
        self.db.refresh(bid)
        return bid
