# tests/conftest.py
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from selfpress.db.session import Base, get_db
# Import all models to ensure they are registered with Base
from selfpress import models  # noqa: F401
from selfpress.models.book import Book
from selfpress.models.user import User
from selfpress.clients.payments import PaymentIntentResult, get_payment_client
from selfpress.core.exceptions import PaymentProviderError
from selfpress.core.security import create_access_token, get_password_hash
from selfpress.main import create_app

# --- Test Database Setup ---
# Use an in-memory SQLite database for testing. StaticPool keeps a single
# connection so the API's worker threads see the same database as the test.
TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the shared test password once."""
    return get_password_hash("password")

@pytest.fixture
def db_engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db_session_factory(db_engine):
    """Returns a SQLAlchemy session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

@pytest.fixture
def db_session(db_session_factory):
    """Provides a session on a fresh database for one test."""
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()

# --- Payment provider stub ---

class FakePaymentClient:
    """Stands in for StripePaymentClient; records calls and can be told to fail."""

    def __init__(self):
        self.calls = []
        self.error: Optional[str] = None

    async def create_payment_intent(self, amount: int, currency: str) -> PaymentIntentResult:
        self.calls.append((amount, currency))
        if self.error:
            raise PaymentProviderError(f"Error creating payment intent: {self.error}")
        n = len(self.calls)
        return PaymentIntentResult(id=f"pi_test_{n}", client_secret=f"pi_test_{n}_secret")

@pytest.fixture
def payment_client():
    return FakePaymentClient()

# --- API ---

@pytest.fixture
def app(db_session, payment_client):
    application = create_app(init_database=False)

    def override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_payment_client] = lambda: payment_client
    return application

@pytest.fixture
def client(app):
    return TestClient(app)

# --- Helper Fixtures ---

@pytest.fixture
def make_user(db_session, password_hash) -> Callable[..., User]:
    def _make_user(username: str, is_author: bool = False, is_admin: bool = False) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password=password_hash,
            is_author=is_author,
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user

@pytest.fixture
def reader(make_user):
    return make_user("reader")

@pytest.fixture
def other_reader(make_user):
    return make_user("other_reader")

@pytest.fixture
def author(make_user):
    return make_user("author", is_author=True)

@pytest.fixture
def admin(make_user):
    return make_user("admin", is_admin=True)

@pytest.fixture
def book(db_session, author):
    book = Book(title="Beyond The Horizon", author_id=author.id, author_name="Author", price=1299, genre="Science Fiction")
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book

@pytest.fixture
def auth_headers() -> Callable[[User], dict]:
    """Builds the bearer header of a logged-in user."""
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _headers
