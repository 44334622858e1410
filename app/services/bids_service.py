#app/services/bids_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, List, Tuple

from app.core.errors import BadRequestError, ForbiddenError
from app.core.ids import check_page, parse_uuid
from app.models.bid import Bid
from app.models.enums import BidAuthorType, BidStatus
from app.policies.bid_policy import require_bid_author, require_organization_responsible
from app.repositories.base import BidPatch, BidStore, TenderStore, UserDirectory

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------


def parse_bid_status(raw: Any) -> BidStatus:
    if isinstance(raw, BidStatus):
        return raw
    try:
        return BidStatus(str(raw))
    except ValueError:
        raise BadRequestError(f"Invalid bid status: {raw!r}.")


def parse_author_type(raw: Any) -> BidAuthorType:
    if isinstance(raw, BidAuthorType):
        return raw
    try:
        return BidAuthorType(str(raw))
    except ValueError:
        raise BadRequestError(f"Invalid author type: {raw!r}.")


# ---------------------------------------------------------------------
# service
# ---------------------------------------------------------------------


class BidService:
    def __init__(self, bids: BidStore, tenders: TenderStore, users: UserDirectory) -> None:
        self.bids = bids
        self.tenders = tenders
        self.users = users

    def _authorize(self, bid_id: Any, username: str) -> Tuple[Bid, uuid.UUID]:
        bid = self.bids.get(parse_uuid(bid_id, "bidId"))
        user_id = self.users.resolve_user_id(username)
        try:
            require_bid_author(bid, user_id)
        except ForbiddenError:
            logger.warning(
                "bid access denied",
                extra={"bid_id": str(bid.id), "username": username},
            )
            raise
        return bid, user_id

    # -----------------------------------------------------------------
    # create
    # -----------------------------------------------------------------

    def create_bid(
        self,
        description: str,
        tender_id: Any,
        organization_id: Any,
        user_id: Any,
        author_type: Any = BidAuthorType.USER,
    ) -> Bid:
        tid = parse_uuid(tender_id, "tenderId")
        oid = parse_uuid(organization_id, "organizationId")
        uid = parse_uuid(user_id, "userId")
        kind = parse_author_type(author_type)

        self.users.get_by_id(uid)
        self.tenders.get(tid)
        # membership in the bidding organization, not ownership of the tender
        require_organization_responsible(self.users, uid, oid)

        bid = self.bids.create(
            description=description or "",
            tender_id=tid,
            organization_id=oid,
            user_id=uid,
            author_type=kind,
            status=BidStatus.CREATED,
        )
        logger.info(
            "bid created",
            extra={"bid_id": str(bid.id), "tender_id": str(tid), "user_id": str(uid)},
        )
        return bid

    # -----------------------------------------------------------------
    # listings
    # -----------------------------------------------------------------

    def get_user_bids(self, username: str, limit: int, offset: int) -> List[Bid]:
        check_page(limit, offset)
        user_id = self.users.resolve_user_id(username)
        return self.bids.list_by_user(user_id, limit, offset)

    def get_bids_by_tender_id(
        self, tender_id: Any, username: str, limit: int, offset: int
    ) -> List[Bid]:
        tid = parse_uuid(tender_id, "tenderId")
        check_page(limit, offset)

        tender = self.tenders.get(tid)
        user_id = self.users.resolve_user_id(username)
        # only staff of the tender's organization see its bids
        require_organization_responsible(self.users, user_id, tender.organization_id)

        return self.bids.list_by_tender(tid, limit, offset)

    # -----------------------------------------------------------------
    # author-only operations
    # -----------------------------------------------------------------

    def get_bid_status(self, bid_id: Any, username: str) -> BidStatus:
        bid, _ = self._authorize(bid_id, username)
        return BidStatus(bid.status)

    def update_bid_status(self, bid_id: Any, status: Any, username: str) -> Bid:
        new_status = parse_bid_status(status)
        bid, _ = self._authorize(bid_id, username)

        updated = self.bids.update_status(bid, new_status)
        logger.info(
            "bid status updated",
            extra={"bid_id": str(updated.id), "status": new_status.value, "username": username},
        )
        return updated

    def edit_bid(self, bid_id: Any, username: str, patch: BidPatch) -> Bid:
        if patch is None or patch.is_empty():
            raise BadRequestError("Nothing to edit: supply description or authorType.")
        bid, _ = self._authorize(bid_id, username)

        updated = self.bids.update_fields(bid, patch)
        logger.info(
            "bid edited",
            extra={"bid_id": str(updated.id), "fields": sorted(patch.changes()), "username": username},
        )
        return updated

    def submit_bid_feedback(self, bid_id: Any, username: str, feedback: str) -> Bid:
        bid_uuid = parse_uuid(bid_id, "bidId")
        if not feedback or not feedback.strip():
            raise BadRequestError("Feedback text is required.")
        bid, _ = self._authorize(bid_uuid, username)

        self.bids.append_feedback(bid, feedback)
        logger.info(
            "bid feedback submitted",
            extra={"bid_id": str(bid.id), "username": username},
        )
        return bid
