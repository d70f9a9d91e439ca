"""
CRUD operations for the Manuscript model.

Authors manage their own manuscripts; staff edit any of them and approve
submissions. The status vocabulary is ManuscriptStatus; approval moves a
submission to 'accepted' and never creates a Book.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import Forbidden, InvalidStatus, NotFound
from ..models.manuscript import APPROVABLE_STATUSES, AUTHOR_STATUSES, Manuscript, ManuscriptStatus
from ..schemas.manuscript import ManuscriptAdminUpdate, ManuscriptCreate, ManuscriptUpdate
from .base import apply_updates, commit_or_rollback, plain

logger = logging.getLogger(__name__)

def _check_author_status(status: Optional[ManuscriptStatus]) -> None:
    if status is not None and status not in AUTHOR_STATUSES:
        allowed = ", ".join(sorted(s.value for s in AUTHOR_STATUSES))
        raise InvalidStatus(f"Authors may only set status to: {allowed}")

def get_manuscript(db: Session, manuscript_id: int) -> Optional[Manuscript]:
    return db.get(Manuscript, manuscript_id)

def get_manuscripts_for_author(db: Session, author_id: int) -> List[Manuscript]:
    return db.query(Manuscript).\
            filter(Manuscript.author_id == author_id).\
            order_by(desc(Manuscript.updated_at), desc(Manuscript.id)).all()

def get_all_manuscripts(db: Session, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Manuscript]:
    """All manuscripts, optionally filtered by status ('pending' means 'submitted')."""
    query = db.query(Manuscript)
    if status:
        try:
            wanted = ManuscriptStatus.parse(status)
        except ValueError:
            raise InvalidStatus(f"Unknown manuscript status '{status}'")
        query = query.filter(Manuscript.status == wanted.value)
    return query.order_by(Manuscript.id).offset(skip).limit(limit).all()

def create_manuscript(db: Session, manuscript: ManuscriptCreate, author_id: int) -> Manuscript:
    """
    Stores a new manuscript for an author.

    Raises:
        InvalidStatus: If the initial status is neither draft nor submitted.
    """
    _check_author_status(manuscript.status)
    data = {field: plain(value) for field, value in manuscript.model_dump().items()}
    db_manuscript = Manuscript(**data, author_id=author_id)
    db.add(db_manuscript)
    commit_or_rollback(db, f"creation of manuscript '{manuscript.title}'")
    db.refresh(db_manuscript)
    logger.info(f"Manuscript {db_manuscript.id} created by author {author_id} with status '{db_manuscript.status}'.")
    return db_manuscript

def update_own_manuscript(db: Session, manuscript_id: int, changes: ManuscriptUpdate, requesting_user_id: int) -> Manuscript:
    """
    Applies an author's revision.

    Raises:
        NotFound: If the manuscript does not exist.
        Forbidden: If the requesting user does not own it.
        InvalidStatus: If the new status is not one an author may set.
    """
    db_manuscript = get_manuscript(db, manuscript_id)
    if not db_manuscript:
        raise NotFound("Manuscript not found")
    if db_manuscript.author_id != requesting_user_id:
        logger.warning(f"User {requesting_user_id} tried to update manuscript {manuscript_id} owned by {db_manuscript.author_id}")
        raise Forbidden("Not authorized to update this manuscript")
    _check_author_status(changes.status)

    apply_updates(db_manuscript, changes.model_dump(exclude_unset=True))
    commit_or_rollback(db, f"update of manuscript {manuscript_id}")
    db.refresh(db_manuscript)
    return db_manuscript

def admin_update_manuscript(db: Session, manuscript_id: int, changes: ManuscriptAdminUpdate) -> Manuscript:
    db_manuscript = get_manuscript(db, manuscript_id)
    if not db_manuscript:
        raise NotFound("Manuscript not found")
    apply_updates(db_manuscript, changes.model_dump(exclude_unset=True))
    commit_or_rollback(db, f"admin update of manuscript {manuscript_id}")
    db.refresh(db_manuscript)
    logger.info(f"Manuscript {manuscript_id} updated by admin. Status: '{db_manuscript.status}'")
    return db_manuscript

def approve_manuscript(db: Session, manuscript_id: int) -> Manuscript:
    """
    Accepts a submitted or in-review manuscript.

    The book itself is published separately by an admin.

    Raises:
        NotFound: If the manuscript does not exist.
        InvalidStatus: If it is not awaiting review.
    """
    db_manuscript = get_manuscript(db, manuscript_id)
    if not db_manuscript:
        raise NotFound("Manuscript not found")
    current = ManuscriptStatus.parse(db_manuscript.status)
    if current not in APPROVABLE_STATUSES:
        raise InvalidStatus(f"Cannot approve a manuscript with status '{current.value}'")

    db_manuscript.status = ManuscriptStatus.ACCEPTED.value
    commit_or_rollback(db, f"approval of manuscript {manuscript_id}")
    db.refresh(db_manuscript)
    logger.info(f"Manuscript {manuscript_id} approved. Publishing the book is a manual follow-up.")
    return db_manuscript

def delete_manuscript(db: Session, manuscript_id: int) -> None:
    db_manuscript = get_manuscript(db, manuscript_id)
    if not db_manuscript:
        raise NotFound("Manuscript not found")
    db.delete(db_manuscript)
    commit_or_rollback(db, f"deletion of manuscript {manuscript_id}")
