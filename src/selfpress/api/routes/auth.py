"""
Registration, login and the caller's own profile.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.exceptions import AuthenticationRequired
from ...core.security import create_access_token
from ...crud import authenticate_user, create_user, update_profile
from ...db.session import get_db
from ...models.user import User
from ...schemas.user import Token, UserCreate, UserLogin, UserProfileUpdate, UserSchema
from ..deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _token_for(user: User) -> Token:
    return Token(access_token=create_access_token(user.id), user=UserSchema.model_validate(user))


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    user = create_user(db, payload)
    return _token_for(user)


@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, payload.username, payload.password)
    if not user:
        logger.warning(f"Failed login for '{payload.username}'")
        raise AuthenticationRequired("Invalid username or password")
    logger.info(f"User {user.id} logged in.")
    return _token_for(user)


@router.get("/user", response_model=UserSchema)
def read_current_user(user: User = Depends(get_current_user)):
    return user


@router.patch("/user", response_model=UserSchema)
def update_current_user(
    changes: UserProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return update_profile(db, user, changes)
