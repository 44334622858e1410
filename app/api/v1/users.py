from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_user_directory
from app.repositories.base import UserDirectory
from app.schemas.users import UserResponse

router = APIRouter(prefix="/users")


def _iso(dt):
    return dt.isoformat() if dt else None


@router.get("", response_model=List[UserResponse])
def list_users(users: UserDirectory = Depends(get_user_directory)):
    return [
        {
            "id": str(u.id),
            "username": u.username,
            "firstName": u.first_name,
            "lastName": u.last_name,
            "createdAt": _iso(u.created_at),
            "updatedAt": _iso(u.updated_at),
        }
        for u in users.list_users()
    ]
