"""
Access control dependencies.

`get_current_user` authenticates the bearer token; `require_admin` and
`require_author` add the role check on top of it. Routers attach them at
registration time, e.g. the admin router is declared with
`dependencies=[Depends(require_admin)]`.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..core.exceptions import AuthenticationRequired, Forbidden
from ..core.security import decode_access_token
from ..db.session import get_db
from ..models.user import User

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def get_token_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> int:
    """Resolves the user id from the token without touching the database."""
    if not token:
        raise AuthenticationRequired()
    user_id = decode_access_token(token)
    if user_id is None:
        raise AuthenticationRequired("Invalid or expired session")
    return user_id


def get_current_user(
    user_id: int = Depends(get_token_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationRequired("Invalid or expired session")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        logger.warning(f"User {user.id} refused access to an admin endpoint")
        raise Forbidden("Admin access required")
    return user


def require_author(user: User = Depends(get_current_user)) -> User:
    if not (user.is_author or user.is_admin):
        logger.warning(f"User {user.id} refused access to an author endpoint")
        raise Forbidden("Author access required")
    return user
