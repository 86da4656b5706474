# labrecord/crud/base.py
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from labrecord.core.errors import PersistenceError

logger = logging.getLogger(__name__)


def save(db: Session, obj=None):
    """Commit the session; on failure roll back and raise PersistenceError."""
    try:
        if obj is not None:
            db.add(obj)
        db.commit()
        if obj is not None:
            db.refresh(obj)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"❌ [DB] Commit failed: {e}")
        raise PersistenceError("Could not save changes, please try again") from e
    return obj


def read(func):
    """Turn store failures of a query helper into PersistenceError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception(f"❌ [DB] Query {func.__name__} failed: {e}")
            raise PersistenceError("Could not load data, please try again") from e

    return wrapper
