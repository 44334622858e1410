# app/services/tenders_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional, Tuple

from app.core.errors import BadRequestError
from app.core.ids import parse_positive_int, parse_uuid
from app.models.enums import TenderStatus
from app.models.tender import Tender
from app.policies.tender_policy import require_tender_access
from app.repositories.base import TenderDraft, TenderPatch, TenderStore, UserDirectory

logger = logging.getLogger(__name__)


def parse_tender_status(raw: Any) -> TenderStatus:
    if isinstance(raw, TenderStatus):
        return raw
    try:
        return TenderStatus(str(raw))
    except ValueError:
        raise BadRequestError(f"Invalid tender status: {raw!r}.")


class TenderService:
    """
    Tender lifecycle behind the creator-or-responsible permission rule.

    Id-addressed operations validate in a fixed order and stop at the first
    failure: id format, tender existence, username resolution, permission.
    Nothing is written before all four pass.
    """

    def __init__(self, tenders: TenderStore, users: UserDirectory) -> None:
        self.tenders = tenders
        self.users = users

    # -----------------------------------------------------------------
    # helpers
    # -----------------------------------------------------------------

    def _authorize(self, tender_id: Any, username: str) -> Tuple[Tender, uuid.UUID]:
        tid = parse_uuid(tender_id, "tenderId")
        tender = self.tenders.get(tid)
        user_id = self.users.resolve_user_id(username)
        require_tender_access(self.users, tender, user_id)
        return tender, user_id

    # -----------------------------------------------------------------
    # reads
    # -----------------------------------------------------------------

    def list_tenders(self, service_type: Optional[str] = None) -> List[Tender]:
        return self.tenders.list_by_service_type(service_type or None)

    def list_user_tenders(self, username: str) -> List[Tender]:
        return self.tenders.list_by_creator_username(username)

    def get_tender_status(self, tender_id: Any, username: str) -> TenderStatus:
        tender, _ = self._authorize(tender_id, username)
        return TenderStatus(tender.status)

    # -----------------------------------------------------------------
    # writes
    # -----------------------------------------------------------------

    def create_tender(
        self,
        *,
        name: str,
        description: str,
        service_type: str,
        organization_id: Any,
        creator_username: str,
        status: Any = TenderStatus.CREATED,
    ) -> Tender:
        # any known user may open a tender for any organization id
        org_id = parse_uuid(organization_id, "organizationId")
        initial = parse_tender_status(status)
        if not name or not name.strip():
            raise BadRequestError("Tender name is required.")

        creator_id = self.users.resolve_user_id(creator_username)

        tender = self.tenders.create(
            TenderDraft(
                name=name,
                description=description or "",
                service_type=service_type or "",
                status=initial,
                organization_id=org_id,
                creator_id=creator_id,
            )
        )
        logger.info(
            "tender created",
            extra={"tender_id": str(tender.id), "creator": creator_username},
        )
        return tender

    def update_tender_status(self, tender_id: Any, status: Any, username: str) -> Tender:
        new_status = parse_tender_status(status)
        tender, _ = self._authorize(tender_id, username)

        updated = self.tenders.update_status(tender, new_status)
        logger.info(
            "tender status updated",
            extra={
                "tender_id": str(updated.id),
                "status": new_status.value,
                "version": updated.version,
                "username": username,
            },
        )
        return updated

    def edit_tender(
        self,
        tender_id: Any,
        username: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> Tender:
        patch = TenderPatch(name=name, description=description, service_type=service_type)
        if patch.is_empty():
            raise BadRequestError("Nothing to edit: supply name, description or serviceType.")
        if name is not None and not name.strip():
            raise BadRequestError("Tender name is required.")
        tender, _ = self._authorize(tender_id, username)

        updated = self.tenders.update_fields(tender, patch)
        logger.info(
            "tender edited",
            extra={
                "tender_id": str(updated.id),
                "fields": sorted(patch.changes()),
                "version": updated.version,
                "username": username,
            },
        )
        return updated

    def rollback_tender_version(self, tender_id: Any, version: Any, username: str) -> Tender:
        target = parse_positive_int(version, "version")
        tender, _ = self._authorize(tender_id, username)

        history = self.tenders.get_history(tender.id, target)
        patch = TenderPatch(
            name=history.name,
            description=history.description,
            service_type=history.service_type,
            status=TenderStatus(history.status),
        )
        updated = self.tenders.update_fields(tender, patch)
        logger.info(
            "tender rolled back",
            extra={
                "tender_id": str(updated.id),
                "restored_version": target,
                "version": updated.version,
                "username": username,
            },
        )
        return updated
