from __future__ import annotations

import uuid

from app.core.errors import ForbiddenError
from app.models.bid import Bid
from app.repositories.base import UserDirectory


def require_bid_author(bid: Bid, user_id: uuid.UUID) -> None:
    """
    Only the employee who submitted the bid may read or change it.
    Organization responsibles get no extra rights here.
    """
    if bid.user_id != user_id:
        raise ForbiddenError("Insufficient permissions for this bid.")


def require_organization_responsible(
    users: UserDirectory, user_id: uuid.UUID, organization_id: uuid.UUID
) -> None:
    if not users.is_organization_responsible(user_id, organization_id):
        raise ForbiddenError("User is not responsible for this organization.")
