"""
Catalogue, reviews and the author's own books.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.exceptions import NotFound
from ...crud import (
    create_book,
    create_review,
    get_book_by_id,
    get_books_by_author,
    get_books_by_genre,
    get_reviews_for_book,
    search_books,
)
from ...db.session import get_db
from ...models.user import User
from ...schemas.book import BookBase, BookCreate, BookSchema
from ...schemas.review import ReviewCreate, ReviewSchema
from ..deps import get_current_user, require_author

router = APIRouter(prefix="/api", tags=["books"])


@router.get("/books", response_model=List[BookSchema])
def list_books(q: Optional[str] = None, genre: Optional[str] = None, db: Session = Depends(get_db)):
    return search_books(db, query=q, genre=genre, limit=500)


@router.get("/books/genre/{genre}", response_model=List[BookSchema])
def list_books_by_genre(genre: str, db: Session = Depends(get_db)):
    return get_books_by_genre(db, genre)


@router.get("/books/{book_id}", response_model=BookSchema)
def read_book(book_id: int, db: Session = Depends(get_db)):
    book = get_book_by_id(db, book_id)
    if not book:
        raise NotFound("Book not found")
    return book


@router.get("/books/{book_id}/reviews", response_model=List[ReviewSchema])
def list_reviews(book_id: int, db: Session = Depends(get_db)):
    if not get_book_by_id(db, book_id):
        raise NotFound("Book not found")
    return get_reviews_for_book(db, book_id)


@router.post("/books/{book_id}/reviews", response_model=ReviewSchema, status_code=status.HTTP_201_CREATED)
def add_review(
    book_id: int,
    review: ReviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return create_review(db, review, user_id=user.id, book_id=book_id)


@router.get("/author/books", response_model=List[BookSchema])
def list_my_books(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_books_by_author(db, user.id)


@router.post("/author/books", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def publish_my_book(
    book: BookBase,
    user: User = Depends(require_author),
    db: Session = Depends(get_db),
):
    return create_book(db, BookCreate(**book.model_dump(), author_id=user.id))
