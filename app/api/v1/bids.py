# app/api/v1/bids.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_bid_service
from app.core.config import get_settings
from app.repositories.base import BidPatch
from app.schemas.bids import BidCreateRequest, BidEditRequest, BidResponse
from app.services.bids_service import BidService

router = APIRouter(prefix="/bids")

DEFAULT_LIMIT = get_settings().default_page_limit


def _iso(dt):
    return dt.isoformat() if dt else None


def _resp(b) -> dict:
    return {
        "id": str(b.id),
        "tenderId": str(b.tender_id),
        "organizationId": str(b.organization_id),
        "authorId": str(b.user_id),
        "authorType": b.author_type,
        "description": b.description,
        "status": b.status,
        "createdAt": _iso(b.created_at),
        "updatedAt": _iso(b.updated_at),
    }


@router.post("/new", response_model=BidResponse)
def create_bid(
    body: BidCreateRequest,
    svc: BidService = Depends(get_bid_service),
):
    b = svc.create_bid(
        body.description,
        body.tenderId,
        body.organizationId,
        body.userId,
        body.authorType,
    )
    return _resp(b)


@router.get("/my", response_model=List[BidResponse])
def list_my_bids(
    username: str = Query(..., min_length=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    svc: BidService = Depends(get_bid_service),
):
    return [_resp(b) for b in svc.get_user_bids(username, limit, offset)]


@router.get("/{tenderId}/list", response_model=List[BidResponse])
def list_tender_bids(
    tenderId: str,
    username: str = Query(..., min_length=1),
    # required here, unlike /my
    limit: int = Query(..., ge=1, le=100),
    offset: int = Query(..., ge=0),
    svc: BidService = Depends(get_bid_service),
):
    return [_resp(b) for b in svc.get_bids_by_tender_id(tenderId, username, limit, offset)]


@router.get("/{bidId}/status")
def get_bid_status(
    bidId: str,
    username: str = Query(..., min_length=1),
    svc: BidService = Depends(get_bid_service),
):
    return svc.get_bid_status(bidId, username).value


@router.put("/{bidId}/status", response_model=BidResponse)
def update_bid_status(
    bidId: str,
    status: str = Query(..., min_length=1),
    username: str = Query(..., min_length=1),
    svc: BidService = Depends(get_bid_service),
):
    return _resp(svc.update_bid_status(bidId, status, username))


@router.patch("/{bidId}/edit", response_model=BidResponse)
def edit_bid(
    bidId: str,
    body: BidEditRequest,
    username: str = Query(..., min_length=1),
    svc: BidService = Depends(get_bid_service),
):
    patch = BidPatch(description=body.description, author_type=body.authorType)
    return _resp(svc.edit_bid(bidId, username, patch))


@router.put("/{bidId}/feedback", response_model=BidResponse)
def submit_bid_feedback(
    bidId: str,
    bidFeedback: str = Query(..., min_length=1, max_length=1000),
    username: str = Query(..., min_length=1),
    svc: BidService = Depends(get_bid_service),
):
    return _resp(svc.submit_bid_feedback(bidId, username, bidFeedback))
