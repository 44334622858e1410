from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

# FORCE model registration
import app.models  # noqa: F401
from app.db.base import Base

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    Base.metadata.create_all(bind=engine)
    logger.info("schema ready", extra={"tables": sorted(Base.metadata.tables)})
