# app/api/v1/tenders.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_tender_service
from app.schemas.tenders import TenderCreateRequest, TenderEditRequest, TenderResponse
from app.services.tenders_service import TenderService

router = APIRouter(prefix="/tenders")


def _iso(dt):
    return dt.isoformat() if dt else None


def _resp(t) -> dict:
    return {
        "id": str(t.id),
        "name": t.name,
        "description": t.description,
        "serviceType": t.service_type,
        "status": t.status,
        "organizationId": str(t.organization_id),
        "creatorId": str(t.creator_id),
        "version": t.version,
        "createdAt": _iso(t.created_at),
        "updatedAt": _iso(t.updated_at),
    }


@router.get("", response_model=List[TenderResponse])
def list_tenders(
    service_type: Optional[str] = Query(default=None),
    svc: TenderService = Depends(get_tender_service),
):
    return [_resp(t) for t in svc.list_tenders(service_type)]


@router.post("/new", response_model=TenderResponse)
def create_tender(
    body: TenderCreateRequest,
    svc: TenderService = Depends(get_tender_service),
):
    t = svc.create_tender(
        name=body.name,
        description=body.description,
        service_type=body.serviceType,
        status=body.status,
        organization_id=body.organizationId,
        creator_username=body.creatorUsername,
    )
    return _resp(t)


@router.get("/my", response_model=List[TenderResponse])
def list_my_tenders(
    username: str = Query(..., min_length=1),
    svc: TenderService = Depends(get_tender_service),
):
    return [_resp(t) for t in svc.list_user_tenders(username)]


@router.get("/{tenderId}/status")
def get_tender_status(
    tenderId: str,
    username: str = Query(..., min_length=1),
    svc: TenderService = Depends(get_tender_service),
):
    return svc.get_tender_status(tenderId, username).value


@router.put("/{tenderId}/status", response_model=TenderResponse)
def update_tender_status(
    tenderId: str,
    status: str = Query(..., min_length=1),
    username: str = Query(..., min_length=1),
    svc: TenderService = Depends(get_tender_service),
):
    return _resp(svc.update_tender_status(tenderId, status, username))


@router.patch("/{tenderId}/edit", response_model=TenderResponse)
def edit_tender(
    tenderId: str,
    body: TenderEditRequest,
    username: str = Query(..., min_length=1),
    svc: TenderService = Depends(get_tender_service),
):
    t = svc.edit_tender(
        tenderId,
        username,
        name=body.name,
        description=body.description,
        service_type=body.serviceType,
    )
    return _resp(t)


@router.post("/{tenderId}/rollback/{version}", response_model=TenderResponse)
def rollback_tender(
    tenderId: str,
    version: str,
    username: str = Query(..., min_length=1),
    svc: TenderService = Depends(get_tender_service),
):
    return _resp(svc.rollback_tender_version(tenderId, version, username))
