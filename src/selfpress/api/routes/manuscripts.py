"""
An author's own manuscripts.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.exceptions import Forbidden, NotFound
from ...crud import create_manuscript, get_manuscript, get_manuscripts_for_author, update_own_manuscript
from ...db.session import get_db
from ...models.user import User
from ...schemas.manuscript import ManuscriptCreate, ManuscriptSchema, ManuscriptUpdate
from ..deps import get_current_user

router = APIRouter(prefix="/api/manuscripts", tags=["manuscripts"])


@router.get("", response_model=List[ManuscriptSchema])
def list_my_manuscripts(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_manuscripts_for_author(db, user.id)


@router.post("", response_model=ManuscriptSchema, status_code=status.HTTP_201_CREATED)
def submit_manuscript(
    manuscript: ManuscriptCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return create_manuscript(db, manuscript, author_id=user.id)


@router.get("/{manuscript_id}", response_model=ManuscriptSchema)
def read_manuscript(manuscript_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    manuscript = get_manuscript(db, manuscript_id)
    if not manuscript:
        raise NotFound("Manuscript not found")
    if manuscript.author_id != user.id:
        raise Forbidden("Not authorized to view this manuscript")
    return manuscript


@router.patch("/{manuscript_id}", response_model=ManuscriptSchema)
def revise_manuscript(
    manuscript_id: int,
    changes: ManuscriptUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return update_own_manuscript(db, manuscript_id, changes, requesting_user_id=user.id)
