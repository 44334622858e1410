from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import TenderNotFoundError, TenderHistoryNotFoundError
from app.models.enums import TenderStatus
from app.models.tender import Tender, TenderHistory
from app.models.user import User
from app.repositories.base import TenderDraft, TenderPatch, TenderStore


def _now():
    return datetime.now(timezone.utc)


class SqlTenderStore(TenderStore):
    """
    Every mutating call snapshots the tender into tender_history under its
    current version, applies the change and bumps the version, in a single
    commit.

    (tender_id, version) is unique in tender_history, so of two writers that
    loaded the same version only the first commits; the second gets the
    IntegrityError and its session is rolled back.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, tender_id: uuid.UUID) -> Tender:
        tender = self.db.get(Tender, tender_id)
        if not tender:
            raise TenderNotFoundError(f"Tender {tender_id} not found.")
        return tender

    def create(self, draft: TenderDraft) -> Tender:
        now = _now()
        tender = Tender(
            name=draft.name,
            description=draft.description,
            service_type=draft.service_type,
            status=draft.status.value,
            organization_id=draft.organization_id,
            creator_id=draft.creator_id,
            version=1,
            created_at=now,
            updated_at=now,
        )
        self.db.add(tender)
        self.db.commit()
        self.db.refresh(tender)
        return tender

    def update_status(self, tender: Tender, status: TenderStatus) -> Tender:
        return self._mutate(tender, {"status": status.value})

    def update_fields(self, tender: Tender, patch: TenderPatch) -> Tender:
        return self._mutate(tender, patch.changes())

    def get_history(self, tender_id: uuid.UUID, version: int) -> TenderHistory:
        row = self.db.execute(
            select(TenderHistory).where(
                TenderHistory.tender_id == tender_id,
                TenderHistory.version == version,
            )
        ).scalar_one_or_none()
        if not row:
            raise TenderHistoryNotFoundError(
                f"Tender {tender_id} has no version {version}."
            )
        return row

    def list_by_service_type(self, service_type: Optional[str]) -> List[Tender]:
        stmt = select(Tender)
        if service_type:
            stmt = stmt.where(Tender.service_type == service_type)
        stmt = stmt.order_by(Tender.created_at.desc(), Tender.name)
        return list(self.db.execute(stmt).scalars().all())

    def list_by_creator_username(self, username: str) -> List[Tender]:
        stmt = (
            select(Tender)
            .join(User, Tender.creator_id == User.id)
            .where(User.username == username)
            .order_by(Tender.created_at.desc(), Tender.name)
        )
        return list(self.db.execute(stmt).scalars().all())

    # -----------------------------------------------------------------
    # versioning
    # -----------------------------------------------------------------

    def _snapshot(self, tender: Tender) -> TenderHistory:
        return TenderHistory(
            tender_id=tender.id,
            name=tender.name,
            description=tender.description,
            service_type=tender.service_type,
            status=tender.status,
            organization_id=tender.organization_id,
            creator_id=tender.creator_id,
            version=tender.version,
            updated_at=tender.updated_at or _now(),
        )

    def _mutate(self, tender: Tender, changes: dict) -> Tender:
        self.db.add(self._snapshot(tender))

        for key, value in changes.items():
            setattr(tender, key, value)
        tender.version = tender.version + 1
        tender.updated_at = _now()

        self.db.add(tender)
        try:
            self.db.commit()
        except SQLAlchemyError:
            # drops the snapshot and expires the unapplied changes on tender
            self.db.rollback()
            raise
        self.db.refresh(tender)
        return tender
