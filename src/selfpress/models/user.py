"""
ORM model for the User entity.
Holds identity, profile fields and the two role flags that gate the
author and admin parts of the API.
"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from selfpress.db.session import Base

class User(Base):
    """
    A registered account.

    Attributes:
        id (int): Primary key.
        username (str): Unique login name.
        email (str): Contact email, unique (case-insensitive).
        hashed_password (str): bcrypt hash of the password.
        full_name (str): Display name.
        bio (str): Author biography.
        avatar_url (str): Avatar image reference.
        is_author (bool): May publish books from the author dashboard.
        is_admin (bool): May use the /api/admin endpoints.
        created_at (datetime): Registration time.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(512), nullable=True)
    is_author = Column(Boolean, default=False, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    books = relationship("Book", back_populates="author")
    manuscripts = relationship("Manuscript", back_populates="author", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")
    payment_intents = relationship("PaymentIntent", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
