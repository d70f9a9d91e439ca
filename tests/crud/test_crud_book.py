# tests/crud/test_crud_book.py
import pytest

from selfpress.core.exceptions import NotFound
from selfpress.crud import (
    create_book,
    delete_book,
    get_book_by_id,
    get_books_by_author,
    get_books_by_genre,
    search_books,
    update_book,
)
from selfpress.models.review import Review
from selfpress.schemas.book import BookCreate, BookUpdate

def test_create_book_uses_author_name(db_session, author):
    created = create_book(db_session, BookCreate(title="Debut", price=1500, author_id=author.id))

    assert created.author_name == "author"
    assert created.rating == 0
    assert created.review_count == 0

def test_create_book_unknown_author(db_session):
    with pytest.raises(NotFound):
        create_book(db_session, BookCreate(title="Ghost Written", price=100, author_id=999))

def test_search_books(db_session, book):
    create_book(db_session, BookCreate(title="Quiet Waters", price=800, genre="Poetry", author_name="Mara Lind"))

    assert [b.title for b in search_books(db_session, query="horizon")] == ["Beyond The Horizon"]
    assert [b.title for b in search_books(db_session, query="lind")] == ["Quiet Waters"]
    assert [b.title for b in search_books(db_session, genre="poetry")] == ["Quiet Waters"]
    assert len(search_books(db_session)) == 2

def test_get_books_by_genre_and_author(db_session, book, author):
    assert [b.id for b in get_books_by_genre(db_session, "Science Fiction")] == [book.id]
    assert get_books_by_genre(db_session, "Romance") == []
    assert [b.id for b in get_books_by_author(db_session, author.id)] == [book.id]

def test_update_book(db_session, book):
    updated = update_book(db_session, book.id, BookUpdate(price=999, genre="Adventure"))

    assert updated.price == 999
    assert updated.genre == "Adventure"
    assert updated.title == "Beyond The Horizon"

def test_delete_book_removes_reviews(db_session, book, reader):
    db_session.add(Review(rating=5, user_id=reader.id, book_id=book.id))
    db_session.commit()

    delete_book(db_session, book.id)

    assert get_book_by_id(db_session, book.id) is None
    assert db_session.query(Review).count() == 0
    with pytest.raises(NotFound):
        delete_book(db_session, book.id)
