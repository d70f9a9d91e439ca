# tests/models/test_review_model.py
import pytest
from sqlalchemy.exc import IntegrityError

from selfpress.models.review import Review

def test_create_review(db_session, reader, book):
    """Test creating a valid Review instance."""
    review = Review(rating=4, comment="This is a test review.", user_id=reader.id, book_id=book.id)
    db_session.add(review)
    db_session.commit()

    retrieved_review = db_session.query(Review).filter(
        Review.user_id == reader.id, Review.book_id == book.id
    ).first()

    assert retrieved_review is not None
    assert retrieved_review.rating == 4
    assert retrieved_review.comment == "This is a test review."
    assert retrieved_review.created_at is not None
    assert retrieved_review.user.id == reader.id
    assert retrieved_review.book.id == book.id

@pytest.mark.parametrize("invalid_rating", [0, 6, -1])
def test_create_review_invalid_rating(db_session, reader, book, invalid_rating):
    """Test that the check constraint rejects ratings outside 1..5."""
    db_session.add(Review(rating=invalid_rating, user_id=reader.id, book_id=book.id))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_same_user_can_review_twice(db_session, reader, book):
    """A reader may leave more than one review for the same book."""
    db_session.add(Review(rating=4, user_id=reader.id, book_id=book.id))
    db_session.add(Review(rating=2, user_id=reader.id, book_id=book.id))
    db_session.commit()

    assert db_session.query(Review).filter(Review.book_id == book.id).count() == 2

def test_create_review_no_comment(db_session, reader, book):
    review = Review(rating=5, user_id=reader.id, book_id=book.id)
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    assert review.comment is None
