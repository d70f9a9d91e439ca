from sqlalchemy.orm import Session
from sqlalchemy import desc, func, update
import logging
from typing import List, Optional

from ..core.exceptions import InvalidRating, NotFound, ValidationError
from ..models.review import Review
from ..models.book import Book
from ..schemas.review import ReviewCreate
from .base import commit_or_rollback

logger = logging.getLogger(__name__)


def rounded_mean(total: int, count: int) -> int:
    """Mean of `count` ratings summing to `total`, rounded half up; 0 when empty."""
    if count <= 0:
        return 0
    return (2 * total + count) // (2 * count)


def _add_rating_to_book(db: Session, book_id: int, rating: int) -> None:
    """
    Folds one new rating into the book's aggregate with a single UPDATE.

    All right-hand sides read the pre-update row, so the new rating is
    round((rating_total + r) / (review_count + 1)). The database serializes
    concurrent updates of the same row, so no increment is lost.
    """
    new_total = Book.rating_total + rating
    new_count = Book.review_count + 1
    db.execute(
        update(Book)
        .where(Book.id == book_id)
        .values(
            rating_total=new_total,
            review_count=new_count,
            rating=(2 * new_total + new_count) // (2 * new_count),
        )
        .execution_options(synchronize_session=False)
    )


def recompute_book_rating(db: Session, book_id: int) -> None:
    """
    Recalculates a book's rating, review_count and rating_total from the
    review table. Used after reviews are removed.
    No commit here, the caller handles it.
    """
    count, total = db.query(func.count(Review.id), func.coalesce(func.sum(Review.rating), 0))\
                     .filter(Review.book_id == book_id)\
                     .one()

    book = db.query(Book).filter(Book.id == book_id).first()
    if book:
        book.review_count = count
        book.rating_total = total
        book.rating = rounded_mean(total, count)
        db.add(book)


def create_review(db: Session, review: ReviewCreate, user_id: int, book_id: int) -> Review:
    """
    Stores a review and updates the book's rating and review count in the
    same transaction.

    Raises:
        InvalidRating: If the rating is outside 1..5.
        ValidationError: If the book does not exist.
    """
    if not 1 <= review.rating <= 5:
        raise InvalidRating()
    if db.get(Book, book_id) is None:
        raise ValidationError("Invalid review data", errors={"bookId": ["Book not found"]})

    db_review = Review(
        **review.model_dump(),
        user_id=user_id,
        book_id=book_id,
    )
    db.add(db_review)
    db.flush() # Ensure db_review gets an ID and is pending insertion

    _add_rating_to_book(db=db, book_id=book_id, rating=review.rating)

    commit_or_rollback(db, f"review creation/rating update for book {book_id}")
    db.refresh(db_review)
    logger.info(f"Review {db_review.id} created for book {book_id} by user {user_id}. Rating aggregate updated.")
    return db_review


def get_reviews_for_book(db: Session, book_id: int, limit: int = 100) -> List[Review]:
    """Latest reviews for a book, newest first."""
    return db.query(Review).\
            filter(Review.book_id == book_id).\
            order_by(desc(Review.created_at), desc(Review.id)).\
            limit(limit).all()


def get_review_by_id(db: Session, review_id: int) -> Optional[Review]:
    return db.get(Review, review_id)


def get_all_reviews_admin(db: Session, skip: int = 0, limit: int = 100) -> List[Review]:
    """All reviews, newest first. For the admin views."""
    return db.query(Review).\
            order_by(desc(Review.created_at), desc(Review.id)).\
            offset(skip).\
            limit(limit).all()


def delete_review(db: Session, review_id: int) -> None:
    """
    Permanently deletes a review and recalculates the book's rating.

    Raises:
        NotFound: If the review does not exist.
    """
    db_review = get_review_by_id(db, review_id)

    if not db_review:
        logger.warning(f"Attempted to delete non-existent review ID: {review_id}")
        raise NotFound("Review not found")

    book_id = db_review.book_id # Get book_id BEFORE deleting

    db.delete(db_review)
    db.flush() # The review must be gone before the recount

    recompute_book_rating(db=db, book_id=book_id)

    commit_or_rollback(db, f"deletion/rating update for review {review_id}")
    logger.info(f"Review {review_id} deleted. Rating for book {book_id} recalculated.")
