# tests/crud/test_crud_user.py
import pytest

from selfpress.core.config import settings
from selfpress.core.exceptions import Conflict, NotFound
from selfpress.core.security import verify_password
from selfpress.crud import (
    admin_update_user,
    authenticate_user,
    create_review,
    create_user,
    delete_user,
    get_user,
    get_user_by_username,
    get_users,
    promote_admin_emails,
    update_profile,
)
from selfpress.models.book import Book
from selfpress.models.review import Review
from selfpress.schemas.review import ReviewCreate
from selfpress.schemas.user import UserAdminUpdate, UserCreate, UserProfileUpdate

def test_create_user_crud(db_session):
    """Test the create_user CRUD function."""
    user = create_user(db_session, UserCreate(username="writer", email="writer@example.com", password="s3cret"))

    assert user.id is not None
    assert user.username == "writer"
    assert user.hashed_password != "s3cret"
    assert verify_password("s3cret", user.hashed_password)
    assert user.is_author is False
    assert user.is_admin is False

def test_create_user_duplicate_username(db_session):
    create_user(db_session, UserCreate(username="writer", email="a@example.com", password="pw"))

    with pytest.raises(Conflict) as exc_info:
        create_user(db_session, UserCreate(username="Writer", email="b@example.com", password="pw"))

    assert exc_info.value.message == "Username already exists"
    assert len(get_users(db_session)) == 1

def test_create_user_admin_email_is_not_admin(db_session, monkeypatch):
    """Registering with an email from ADMIN_EMAILS grants nothing."""
    monkeypatch.setattr(settings, "ADMIN_EMAILS", "boss@example.com")

    user = create_user(db_session, UserCreate(username="boss", email="boss@example.com", password="pw"))

    assert user.is_admin is False

def test_create_user_duplicate_email(db_session):
    create_user(db_session, UserCreate(username="owner", email="owner@example.com", password="pw"))

    with pytest.raises(Conflict) as exc_info:
        create_user(db_session, UserCreate(username="mallory", email="Owner@example.com", password="pw"))

    assert exc_info.value.message == "Email already registered"
    assert get_user_by_username(db_session, "mallory") is None

def test_profile_email_must_stay_unique(db_session, reader, other_reader):
    with pytest.raises(Conflict):
        update_profile(db_session, reader, UserProfileUpdate(email="other_reader@example.com"))

    db_session.refresh(reader)
    assert reader.email == "reader@example.com"

def test_promote_admin_emails(db_session, reader, other_reader):
    promoted = promote_admin_emails(db_session, ["READER@example.com", "nobody@example.com"])

    assert [u.id for u in promoted] == [reader.id]
    db_session.refresh(reader)
    db_session.refresh(other_reader)
    assert reader.is_admin is True
    assert other_reader.is_admin is False
    assert promote_admin_emails(db_session, ["reader@example.com"]) == []

def test_get_user_by_username_ignores_case(db_session, reader):
    assert get_user_by_username(db_session, "READER").id == reader.id
    assert get_user_by_username(db_session, "nobody") is None

def test_authenticate_user(db_session, reader):
    """Users from the fixtures share the password 'password'."""
    assert authenticate_user(db_session, "reader", "password").id == reader.id
    assert authenticate_user(db_session, "reader", "wrong") is None
    assert authenticate_user(db_session, "ghost", "password") is None

def test_update_profile_keeps_roles(db_session, reader):
    updated = update_profile(db_session, reader, UserProfileUpdate(full_name="Avid Reader", bio="Reads a lot"))

    assert updated.full_name == "Avid Reader"
    assert updated.bio == "Reads a lot"
    assert updated.is_admin is False

def test_admin_update_user_roles(db_session, reader):
    updated = admin_update_user(db_session, reader.id, UserAdminUpdate(is_author=True))

    assert updated.is_author is True
    assert updated.is_admin is False

def test_admin_update_user_not_found(db_session):
    with pytest.raises(NotFound):
        admin_update_user(db_session, 999, UserAdminUpdate(is_admin=True))

def test_delete_user_removes_reviews_and_orphans_books(db_session, reader, other_reader, author, book):
    create_review(db_session, ReviewCreate(rating=5), user_id=reader.id, book_id=book.id)
    create_review(db_session, ReviewCreate(rating=1), user_id=other_reader.id, book_id=book.id)
    db_session.refresh(book)
    assert (book.rating, book.review_count) == (3, 2)

    delete_user(db_session, reader.id)
    delete_user(db_session, author.id)

    assert get_user(db_session, reader.id) is None
    assert [r.user_id for r in db_session.query(Review).all()] == [other_reader.id]
    remaining = db_session.get(Book, book.id)
    assert remaining is not None
    assert remaining.author_id is None
    # The deleted user's rating no longer counts.
    assert (remaining.rating, remaining.review_count, remaining.rating_total) == (1, 1, 1)

def test_delete_user_not_found(db_session):
    with pytest.raises(NotFound):
        delete_user(db_session, 999)
