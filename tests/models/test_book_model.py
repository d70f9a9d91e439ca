# tests/models/test_book_model.py
import pytest
from sqlalchemy.exc import IntegrityError

from selfpress.models.book import Book

def test_create_book(db_session):
    """Test creating a valid Book instance."""
    book = Book(title="The Last Chapter", price=999, genre="Mystery")
    db_session.add(book)
    db_session.commit()

    retrieved_book = db_session.query(Book).filter(Book.title == "The Last Chapter").first()

    assert retrieved_book is not None
    assert retrieved_book.price == 999
    assert retrieved_book.author_id is None # Orphaned books are allowed
    assert retrieved_book.rating == 0 # Check default
    assert retrieved_book.review_count == 0 # Check default
    assert retrieved_book.rating_total == 0
    assert retrieved_book.is_downloadable is True
    assert retrieved_book.published_date is not None

def test_create_book_no_title(db_session):
    """Test that creating a book without a title raises IntegrityError."""
    db_session.add(Book(price=999))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_create_book_no_price(db_session):
    db_session.add(Book(title="Priceless"))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_create_book_negative_price(db_session):
    db_session.add(Book(title="Refund", price=-1))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_book_author_relationship(db_session, book, author):
    db_session.refresh(author)
    assert book.author.id == author.id
    assert [b.id for b in author.books] == [book.id]

def test_book_repr(db_session):
    """Test the __repr__ method of the Book model."""
    title = "Representation Test Book Title That Is Quite Long"
    book = Book(title=title, price=500)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)

    assert repr(book) == f"<Book(id={book.id}, title='{title[:30]}...', price=500)>"
