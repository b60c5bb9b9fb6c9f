"""
Shared Flask-SQLAlchemy handle and column helpers.

The relational store is the only shared mutable state in the application.
Timestamps are stored as naive UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import PersistenceError

db = SQLAlchemy()

# Numeric(10, 2) everywhere money is stored
Money = db.Numeric(10, 2)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.isoformat(timespec="seconds") + "Z"


def commit_session(operation: str) -> None:
    """
    Commit the current session, rolling back and raising PersistenceError
    if the store refuses the write.
    """
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError(operation, e) from e
