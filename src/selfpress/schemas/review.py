"""
Pydantic schemas for the Review entity.
Input and output models for validating and serializing reviews.
"""

from pydantic import Field
import datetime
from typing import Optional

from .base import CamelModel, ORMCamelModel

class ReviewBase(CamelModel):
    """
    Base schema for a review.

    Attributes:
        rating (int): Rating between 1 and 5.
        comment (Optional[str]): Optional comment.
    """
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None

class ReviewCreate(ReviewBase):
    """
    Review creation payload.
    user_id and book_id come from the session and the URL.
    """
    pass

class ReviewSchema(ReviewBase, ORMCamelModel):
    """
    Output schema for a review.

    Attributes:
        id (int): Review id.
        user_id (int): Author of the review.
        book_id (int): Reviewed book.
        created_at (datetime.datetime): Creation time.
    """
    id: int
    user_id: int
    book_id: int
    created_at: datetime.datetime
