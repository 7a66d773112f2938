"""
Small shared helpers
"""

from contextlib import contextmanager
from datetime import datetime, timezone
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Thời gian UTC dạng naive, giống nhau trên PostgreSQL và SQLite"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@contextmanager
def transaction(db: Session, action: str):
    """
    Commit toàn bộ thay đổi trong block một lần duy nhất.
    Lỗi SQLAlchemy -> rollback và PersistenceError; lỗi nghiệp vụ -> rollback và raise lại.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise PersistenceError(f"Failed to {action}") from e
    except Exception:
        db.rollback()
        raise
