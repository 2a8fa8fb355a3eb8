from __future__ import annotations

import logging as _log

from sqlalchemy.exc import SQLAlchemyError  # type: ignore

from core.db import Base, engine
import core.models  # noqa: F401  (registers tables on Base.metadata)


def init_db_if_configured(bind=None) -> bool:
    """Create tables if a database is configured; return True if ready."""
    target = bind if bind is not None else engine
    if target is None:
        _log.getLogger("handover.startup").warning(
            "No database configured; skipping table creation"
        )
        return False
    try:
        Base.metadata.create_all(bind=target)
        return True
    except SQLAlchemyError as exc:
        _log.getLogger("handover.startup").error(f"Table creation failed: {exc}")
        return False
