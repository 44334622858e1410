from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.errors import UserNotFoundError
from app.models.user import User, OrganizationResponsible
from app.repositories.base import UserDirectory


class SqlUserDirectory(UserDirectory):
    def __init__(self, db: Session) -> None:
        self.db = db

    def resolve_user_id(self, username: str) -> uuid.UUID:
        return self.get_by_username(username).id

    def get_by_username(self, username: str) -> User:
        user = self.db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()
        if not user:
            raise UserNotFoundError(f"User {username!r} not found.")
        return user

    def get_by_id(self, user_id: uuid.UUID) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found.")
        return user

    def is_organization_responsible(
        self, user_id: uuid.UUID, organization_id: uuid.UUID
    ) -> bool:
        n = self.db.execute(
            select(func.count())
            .select_from(OrganizationResponsible)
            .where(
                OrganizationResponsible.user_id == user_id,
                OrganizationResponsible.organization_id == organization_id,
            )
        ).scalar_one()
        return bool(n)

    def list_users(self) -> List[User]:
        return list(
            self.db.execute(select(User).order_by(User.username)).scalars().all()
        )
