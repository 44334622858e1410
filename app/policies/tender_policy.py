#/app/policies/tender_policy.py
from __future__ import annotations

import uuid

from app.core.errors import ForbiddenError
from app.models.tender import Tender
from app.repositories.base import UserDirectory


def can_manage_tender(users: UserDirectory, tender: Tender, user_id: uuid.UUID) -> bool:
    # creator always; otherwise any responsible of the owning organization
    if tender.creator_id == user_id:
        return True
    return users.is_organization_responsible(user_id, tender.organization_id)


def require_tender_access(users: UserDirectory, tender: Tender, user_id: uuid.UUID) -> None:
    if not can_manage_tender(users, tender, user_id):
        raise ForbiddenError("Insufficient permissions for this tender.")
