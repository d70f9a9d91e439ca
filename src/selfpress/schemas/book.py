"""
Pydantic schemas for the Book entity.
Prices are integers in minor currency units.
"""

import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, ORMCamelModel

class BookBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    cover_image: Optional[str] = None
    price: int = Field(..., ge=0)
    genre: Optional[str] = None
    is_downloadable: bool = True

class BookCreate(BookBase):
    """
    Admin publish payload. `author_id` may be omitted for books without an
    account behind them.
    """
    author_id: Optional[int] = None
    author_name: Optional[str] = None

class BookUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    genre: Optional[str] = None
    is_downloadable: Optional[bool] = None

class BookSchema(BookBase, ORMCamelModel):
    """
    Output schema for a book, including the derived rating fields.

    Attributes:
        rating (int): Rounded mean of the book's review ratings.
        review_count (int): Number of reviews.
    """
    id: int
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    published_date: Optional[datetime.datetime] = None
    rating: int = 0
    review_count: int = 0
