# /app/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.repositories.bids_repo import SqlBidStore
from app.repositories.tenders_repo import SqlTenderStore
from app.repositories.users_repo import SqlUserDirectory
from app.services.bids_service import BidService
from app.services.tenders_service import TenderService


def get_user_directory(db: Session = Depends(get_db)) -> SqlUserDirectory:
    return SqlUserDirectory(db)


def get_tender_service(db: Session = Depends(get_db)) -> TenderService:
    return TenderService(SqlTenderStore(db), SqlUserDirectory(db))


def get_bid_service(db: Session = Depends(get_db)) -> BidService:
    return BidService(SqlBidStore(db), SqlTenderStore(db), SqlUserDirectory(db))
