"""
CRUD operations for the Book model.
Includes catalogue listing, lookup by id, genre or author, and the publish,
edit and delete operations used by authors and admins.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..core.exceptions import NotFound
from ..models.book import Book
from ..models.user import User
from ..schemas.book import BookCreate, BookUpdate
from .base import apply_updates, commit_or_rollback

logger = logging.getLogger(__name__)

def get_books(db: Session, skip: int = 0, limit: int = 100) -> List[Book]:
    return db.query(Book).order_by(Book.id).offset(skip).limit(limit).all()

def search_books(
    db: Session,
    query: Optional[str] = None,
    genre: Optional[str] = None,
    limit: int = 50
) -> List[Book]:
    """
    Searches books by a free text term (title, author name or genre) and/or
    a genre filter.

    Args:
        db (Session): SQLAlchemy session.
        query (Optional[str]): Partial, case-insensitive match on title,
            author name or genre.
        genre (Optional[str]): Exact genre, case-insensitive.
        limit (int): Maximum number of results.

    Returns:
        List[Book]: Matching books.
    """
    stmt = select(Book)
    if query:
        stmt = stmt.where(or_(
            Book.title.ilike(f"%{query}%"),
            Book.author_name.ilike(f"%{query}%"),
            Book.genre.ilike(f"%{query}%")
        ))
    if genre:
        stmt = stmt.where(func.lower(Book.genre) == genre.lower())
    stmt = stmt.order_by(Book.id).limit(limit)
    return db.execute(stmt).scalars().all()

def get_book_by_id(db: Session, book_id: int) -> Optional[Book]:
    """
    Fetches a book by primary key.

    Returns:
        Optional[Book]: The book, or None if it does not exist.
    """
    return db.get(Book, book_id)

def get_books_by_genre(db: Session, genre: str) -> List[Book]:
    return search_books(db, genre=genre, limit=1000)

def get_books_by_author(db: Session, author_id: int) -> List[Book]:
    return db.query(Book).filter(Book.author_id == author_id).order_by(Book.id).all()

def create_book(db: Session, book: BookCreate) -> Book:
    """
    Publishes a book. When `author_id` points at a user and no `author_name`
    is given, the user's display name is used.
    """
    data = book.model_dump()
    if data.get("author_id") is not None:
        author = db.get(User, data["author_id"])
        if not author:
            raise NotFound("Author not found")
        if not data.get("author_name"):
            data["author_name"] = author.full_name or author.username
    db_book = Book(**data, rating=0, review_count=0, rating_total=0)
    db.add(db_book)
    commit_or_rollback(db, f"publication of '{book.title}'")
    db.refresh(db_book)
    logger.info(f"Book {db_book.id} ('{db_book.title}') published for author {db_book.author_id}.")
    return db_book

def update_book(db: Session, book_id: int, changes: BookUpdate) -> Book:
    db_book = get_book_by_id(db, book_id)
    if not db_book:
        raise NotFound("Book not found")
    apply_updates(db_book, changes.model_dump(exclude_unset=True))
    commit_or_rollback(db, f"update of book {book_id}")
    db.refresh(db_book)
    return db_book

def delete_book(db: Session, book_id: int) -> None:
    """Deletes a book together with its reviews."""
    db_book = get_book_by_id(db, book_id)
    if not db_book:
        raise NotFound("Book not found")
    db.delete(db_book)
    commit_or_rollback(db, f"deletion of book {book_id}")
    logger.info(f"Book {book_id} deleted.")
