"""
CRUD operations for the User model.
Includes registration, lookup by id or username, listing, profile updates,
the admin-only edit and delete operations and the operator step that grants
admin to the accounts listed in ADMIN_EMAILS.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.exceptions import Conflict, NotFound
from ..core.security import get_password_hash, verify_password
from ..models.review import Review
from ..models.user import User
from ..schemas.user import UserAdminUpdate, UserCreate, UserProfileUpdate
from .base import apply_updates, commit_or_rollback
from .crud_review import recompute_book_rating

logger = logging.getLogger(__name__)

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """
    Looks a user up by username, ignoring case.

    Args:
        db (Session): SQLAlchemy session.
        username (str): Username to look for.

    Returns:
        Optional[User]: The user if it exists, None otherwise.
    """
    return db.query(User).filter(func.lower(User.username) == username.lower()).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Looks a user up by email, ignoring case."""
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()

def _check_email_free(db: Session, email: str, user_id: Optional[int] = None) -> None:
    owner = get_user_by_email(db, email)
    if owner is not None and owner.id != user_id:
        raise Conflict("Email already registered")

def create_user(db: Session, user: UserCreate) -> User:
    """
    Registers a new user.

    Role flags always start cleared; only an admin (or the operator running
    `promote_admin_emails`) can grant them.

    Args:
        db (Session): SQLAlchemy session.
        user (UserCreate): Registration data.

    Returns:
        User: The created user.

    Raises:
        Conflict: If the username or the email is already taken.
    """
    if get_user_by_username(db, user.username):
        raise Conflict("Username already exists")
    _check_email_free(db, user.email)
    hashed_password: str = get_password_hash(user.password)
    db_user: User = User(
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        hashed_password=hashed_password,
        is_author=False,
        is_admin=False,
    )
    db.add(db_user)
    commit_or_rollback(db, f"registration of '{user.username}'")
    db.refresh(db_user)
    logger.info(f"User {db_user.id} ('{db_user.username}') registered.")
    return db_user

def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Returns the user when the credentials match, None otherwise."""
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user

def get_users(db: Session, skip: int = 0, limit: int = 100) -> List[User]:
    """
    Lists users ordered by id, with pagination.

    Args:
        db (Session): SQLAlchemy session.
        skip (int): Rows to skip.
        limit (int): Maximum rows to return.

    Returns:
        List[User]: The users.
    """
    return db.query(User).order_by(User.id).offset(skip).limit(limit).all()

def update_profile(db: Session, user: User, changes: UserProfileUpdate) -> User:
    """
    Applies a self-service profile update. Role flags are not touched.

    Raises:
        Conflict: If the new email belongs to another account.
    """
    updates = changes.model_dump(exclude_unset=True)
    if updates.get("email"):
        _check_email_free(db, updates["email"], user_id=user.id)
    apply_updates(user, updates)
    commit_or_rollback(db, f"profile update for user {user.id}")
    db.refresh(user)
    return user

def admin_update_user(db: Session, user_id: int, changes: UserAdminUpdate) -> User:
    db_user = get_user(db, user_id)
    if not db_user:
        raise NotFound("User not found")
    updates = changes.model_dump(exclude_unset=True)
    if updates.get("email"):
        _check_email_free(db, updates["email"], user_id=user_id)
    apply_updates(db_user, updates)
    commit_or_rollback(db, f"admin update for user {user_id}")
    db.refresh(db_user)
    logger.info(f"User {user_id} updated by admin. Author: {db_user.is_author}, admin: {db_user.is_admin}")
    return db_user

def promote_admin_emails(db: Session, emails: Iterable[str]) -> List[User]:
    """
    Grants admin to the existing accounts owning the given emails.

    Run by an operator (see scripts/seed_db.py), never from a request.

    Returns:
        List[User]: Accounts that were promoted by this call.
    """
    promoted: List[User] = []
    for email in emails:
        db_user = get_user_by_email(db, email)
        if db_user is None:
            logger.warning(f"No account registered with admin email '{email}'")
            continue
        if not db_user.is_admin:
            db_user.is_admin = True
            promoted.append(db_user)
    commit_or_rollback(db, "admin promotion")
    for db_user in promoted:
        logger.info(f"User {db_user.id} ('{db_user.username}') promoted to admin.")
    return promoted

def delete_user(db: Session, user_id: int) -> None:
    """
    Deletes a user with their reviews, orders, manuscripts and notifications.

    The rating of every book the user reviewed is recalculated in the same
    transaction. Books they authored are kept without an author.

    Raises:
        NotFound: If the user does not exist.
    """
    db_user = get_user(db, user_id)
    if not db_user:
        raise NotFound("User not found")
    reviewed_book_ids = [
        book_id for (book_id,) in db.query(Review.book_id).filter(Review.user_id == user_id).distinct()
    ]

    db.delete(db_user)
    db.flush() # Reviews must be gone before the recount

    for book_id in reviewed_book_ids:
        recompute_book_rating(db=db, book_id=book_id)

    commit_or_rollback(db, f"deletion of user {user_id}")
    logger.info(f"User {user_id} deleted. Ratings recalculated for books {reviewed_book_ids}.")
