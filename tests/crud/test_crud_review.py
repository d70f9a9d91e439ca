# tests/crud/test_crud_review.py
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from selfpress.crud.crud_review import recompute_book_rating, rounded_mean
from selfpress.core.exceptions import InvalidRating, NotFound, ValidationError
from selfpress.models.book import Book
from selfpress.db.session import Base
from selfpress.models.review import Review
from selfpress.models.user import User

from selfpress.crud import (
    create_review,
    delete_review,
    get_all_reviews_admin,
    get_review_by_id,
    get_reviews_for_book,
)
from selfpress.schemas.review import ReviewCreate

@pytest.mark.parametrize("total, count, expected", [
    (0, 0, 0),
    (4, 1, 4),
    (6, 2, 3),
    (9, 2, 5),   # 4.5 rounds up
    (7, 2, 4),   # 3.5 rounds up
    (10, 3, 3),  # 3.33
    (11, 3, 4),  # 3.67
])
def test_rounded_mean(total, count, expected):
    assert rounded_mean(total, count) == expected

def test_create_review_crud(db_session, reader, book):
    """Test the create_review CRUD function."""
    created_review = create_review(
        db=db_session,
        review=ReviewCreate(rating=5, comment="Excellent book!"),
        user_id=reader.id,
        book_id=book.id
    )

    assert created_review.id is not None
    assert created_review.rating == 5
    assert created_review.comment == "Excellent book!"
    assert created_review.user_id == reader.id
    assert created_review.book_id == book.id

    db_review = db_session.get(Review, created_review.id)
    assert db_review is not None
    assert db_review.rating == 5

def test_rating_aggregate_follows_each_review(db_session, reader, book):
    """A 4 gives rating 4; a following 2 gives round(3.0) = 3 over two reviews."""
    create_review(db_session, ReviewCreate(rating=4), user_id=reader.id, book_id=book.id)
    db_session.refresh(book)
    assert book.rating == 4
    assert book.review_count == 1

    create_review(db_session, ReviewCreate(rating=2), user_id=reader.id, book_id=book.id)
    db_session.refresh(book)
    assert book.rating == 3
    assert book.review_count == 2
    assert book.rating_total == 6

def test_rating_aggregate_rounds_half_up(db_session, reader, other_reader, book):
    create_review(db_session, ReviewCreate(rating=5), user_id=reader.id, book_id=book.id)
    create_review(db_session, ReviewCreate(rating=4), user_id=other_reader.id, book_id=book.id)
    db_session.refresh(book)
    assert book.rating == 5
    assert book.review_count == 2

def test_aggregate_matches_review_table(db_session, reader, other_reader, book):
    """The incremental update agrees with a full recount."""
    for user, rating in [(reader, 1), (other_reader, 5), (reader, 3), (other_reader, 2)]:
        create_review(db_session, ReviewCreate(rating=rating), user_id=user.id, book_id=book.id)
    db_session.refresh(book)
    incremental = (book.rating, book.review_count, book.rating_total)

    recompute_book_rating(db_session, book.id)
    db_session.commit()
    db_session.refresh(book)

    assert (book.rating, book.review_count, book.rating_total) == incremental
    assert incremental == (3, 4, 11)

def test_create_review_invalid_rating(db_session, reader, book):
    """Out-of-range ratings are refused before anything is written."""
    with pytest.raises(InvalidRating) as exc_info:
        create_review(db_session, ReviewCreate.model_construct(rating=6, comment=None),
                      user_id=reader.id, book_id=book.id)

    assert exc_info.value.errors == {"rating": ["Rating must be between 1 and 5"]}
    db_session.refresh(book)
    assert book.review_count == 0
    assert db_session.query(Review).count() == 0

def test_create_review_missing_book(db_session, reader):
    with pytest.raises(ValidationError) as exc_info:
        create_review(db_session, ReviewCreate(rating=3), user_id=reader.id, book_id=999)

    assert exc_info.value.status_code == 400
    assert "bookId" in exc_info.value.errors
    assert db_session.query(Review).count() == 0

def test_get_reviews_for_book(db_session, reader, other_reader, book):
    other_book = Book(title="Another Book", price=500)
    db_session.add(other_book)
    db_session.commit()

    first = create_review(db_session, ReviewCreate(rating=3), user_id=reader.id, book_id=book.id)
    second = create_review(db_session, ReviewCreate(rating=4), user_id=other_reader.id, book_id=book.id)
    create_review(db_session, ReviewCreate(rating=1), user_id=reader.id, book_id=other_book.id)

    reviews = get_reviews_for_book(db_session, book.id)

    assert {r.id for r in reviews} == {first.id, second.id}
    assert len(get_all_reviews_admin(db_session)) == 3

def test_delete_review_recomputes_rating(db_session, reader, other_reader, book):
    keep = create_review(db_session, ReviewCreate(rating=2), user_id=reader.id, book_id=book.id)
    drop = create_review(db_session, ReviewCreate(rating=5), user_id=other_reader.id, book_id=book.id)

    delete_review(db_session, drop.id)

    assert get_review_by_id(db_session, drop.id) is None
    assert get_review_by_id(db_session, keep.id) is not None
    db_session.refresh(book)
    assert book.rating == 2
    assert book.review_count == 1
    assert book.rating_total == 2

def test_delete_last_review_resets_rating(db_session, reader, book):
    review = create_review(db_session, ReviewCreate(rating=4), user_id=reader.id, book_id=book.id)

    delete_review(db_session, review.id)

    db_session.refresh(book)
    assert (book.rating, book.review_count, book.rating_total) == (0, 0, 0)

def test_delete_review_not_found(db_session):
    with pytest.raises(NotFound):
        delete_review(db_session, 12345)

def test_concurrent_reviews_keep_every_rating(tmp_path, password_hash):
    """Reviews written from parallel sessions all land in the aggregate."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'reviews.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with session_factory() as setup:
        user = User(username="crowd", email="crowd@example.com", hashed_password=password_hash)
        target = Book(title="Popular Book", price=1000)
        setup.add_all([user, target])
        setup.commit()
        user_id, book_id = user.id, target.id

    ratings = [(i % 5) + 1 for i in range(10)]
    start = threading.Barrier(len(ratings))

    def write_review(rating: int) -> None:
        with session_factory() as session:
            start.wait()
            create_review(session, ReviewCreate(rating=rating), user_id=user_id, book_id=book_id)

    try:
        with ThreadPoolExecutor(max_workers=len(ratings)) as pool:
            for future in [pool.submit(write_review, rating) for rating in ratings]:
                future.result()

        with session_factory() as check:
            book = check.get(Book, book_id)
            assert book.review_count == len(ratings)
            assert book.rating_total == sum(ratings)
            assert book.rating == rounded_mean(sum(ratings), len(ratings))
            assert check.query(Review).filter(Review.book_id == book_id).count() == len(ratings)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
