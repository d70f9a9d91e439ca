"""
Helpers shared by the CRUD modules.
"""

import enum
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

def plain(value: Any) -> Any:
    """Unwraps enum members so string columns receive their raw value."""
    return value.value if isinstance(value, enum.Enum) else value

def apply_updates(db_obj: Any, updates: Dict[str, Any]) -> Any:
    """Copies the given fields onto an ORM object."""
    for field, value in updates.items():
        setattr(db_obj, field, plain(value))
    return db_obj

def commit_or_rollback(db: Session, action: str) -> None:
    """
    Commits the current transaction. On failure the session is rolled back
    and the error re-raised.
    """
    try:
        db.commit()
    except Exception as e:
        logger.exception(f"Error committing {action}: {e}")
        db.rollback()
        raise
