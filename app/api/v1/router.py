from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.users import router as users_router
from app.api.v1.tenders import router as tenders_router
from app.api.v1.bids import router as bids_router
from app.schemas.users import ErrorResponse

# every domain error reaches the client as {"reason": ...}
ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404)
}

v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(users_router, tags=["users"])

# ------------------------------------------------------------------
# TENDERS / BIDS
# ------------------------------------------------------------------
v1_router.include_router(tenders_router, tags=["tenders"], responses=ERROR_RESPONSES)
v1_router.include_router(bids_router, tags=["bids"], responses=ERROR_RESPONSES)
