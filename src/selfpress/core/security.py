"""
Security utilities for SelfPress.

Password hashing and verification use bcrypt through passlib. Access tokens
are signed JWTs (python-jose) whose subject is the user id; they stand in for
the server-side session of a logged-in user.

Functions:
    verify_password(plain_password: str, hashed_password: str) -> bool
    get_password_hash(password: str) -> str
    create_access_token(user_id: int, expires_delta: Optional[timedelta]) -> str
    decode_access_token(token: str) -> Optional[int]
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from selfpress.core.config import settings

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Checks a plain text password against its hash.

    Args:
        plain_password (str): Password to verify.
        hashed_password (str): Stored hash to compare against.

    Returns:
        bool: True if the password matches the hash, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """
    Hashes a password for storage.

    Args:
        password (str): Plain text password.

    Returns:
        str: The bcrypt hash.
    """
    return pwd_context.hash(password)

def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issues a signed access token for a user.

    Args:
        user_id (int): Id of the authenticated user, stored as the `sub` claim.
        expires_delta (Optional[timedelta]): Lifetime override; defaults to
            ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: The encoded JWT.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)

def decode_access_token(token: str) -> Optional[int]:
    """
    Returns the user id carried by a token, or None when the token is
    malformed, badly signed or expired.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None
