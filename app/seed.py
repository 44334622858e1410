import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.init_db import init_db
from app.db.session import SessionLocal, engine
from app.models.enums import OrganizationType
from app.models.user import User, Organization, OrganizationResponsible

logger = logging.getLogger(__name__)

# organization name -> (type, responsible usernames)
ORGANIZATIONS = {
    "Roads & Bridges LLC": (OrganizationType.LLC, ["alice", "bob"]),
    "City Deliveries JSC": (OrganizationType.JSC, ["carol"]),
}

EMPLOYEES = [
    ("alice", "Alice", "Smith"),
    ("bob", "Bob", "Jones"),
    ("carol", "Carol", "White"),
    ("dave", "Dave", "Brown"),
]


def seed():
    init_db(engine)
    db: Session = SessionLocal()

    try:
        users = {}
        for username, first, last in EMPLOYEES:
            user = db.execute(
                select(User).where(User.username == username)
            ).scalar_one_or_none()
            if not user:
                user = User(username=username, first_name=first, last_name=last)
                db.add(user)
                db.commit()
            users[username] = user

        for name, (org_type, responsibles) in ORGANIZATIONS.items():
            org = db.execute(
                select(Organization).where(Organization.name == name)
            ).scalar_one_or_none()
            if not org:
                org = Organization(name=name, type=org_type.value)
                db.add(org)
                db.commit()

            for username in responsibles:
                exists = db.execute(
                    select(OrganizationResponsible).where(
                        OrganizationResponsible.organization_id == org.id,
                        OrganizationResponsible.user_id == users[username].id,
                    )
                ).scalar_one_or_none()
                if not exists:
                    db.add(
                        OrganizationResponsible(
                            organization_id=org.id, user_id=users[username].id
                        )
                    )
            db.commit()
            logger.info("seeded organization", extra={"organization_id": str(org.id), "org": name})
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging(get_settings())
    seed()
