"""
Generates fake readers, reviews and orders in the SelfPress database.

This script creates users with Faker and, for each of them, a random set of
reviews and completed orders for the books already in the catalogue. It goes
through the project's CRUD and checkout functions, so book ratings and review
counts stay consistent.

Usage:
    python scripts/generate_fake_data.py

Note:
    - The script does NOT create books; run scripts/seed_db.py first.
    - Every generated user shares the password in FAKE_PASSWORD.
"""

import random
import logging
import sys
from faker import Faker
from sqlalchemy.orm import Session
from typing import List, Optional

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

try:
    from selfpress.db.session import SessionLocal, init_db
    from selfpress.models.book import Book
    from selfpress.models.user import User
    from selfpress.schemas.user import UserCreate
    from selfpress.schemas.review import ReviewCreate
    from selfpress.crud.crud_user import create_user, get_user_by_username
    from selfpress.crud.crud_review import create_review
    from selfpress.services.checkout import complete_order
    from selfpress.core.exceptions import SelfPressError
except ImportError as e:
    logger.error(f"Error importing project modules: {e}.")
    logger.error("Make sure the project is installed with 'pip install -e .'")
    sys.exit(1)

NUM_FAKE_USERS: int = 30
MIN_REVIEWS_PER_USER: int = 1
MAX_REVIEWS_PER_USER: int = 6
MAX_ORDERS_PER_USER: int = 3
FAKE_PASSWORD: str = "password123"

fake = Faker(['en_US'])

def _fake_users(db: Session) -> List[int]:
    user_ids: List[int] = []
    for i in range(NUM_FAKE_USERS):
        username: str = fake.unique.user_name()
        existing_user = get_user_by_username(db, username)
        if existing_user:
            logger.info(f"  ({i+1}/{NUM_FAKE_USERS}) User found: {existing_user.username} (ID: {existing_user.id})")
            user_ids.append(existing_user.id)
            continue
        user_in = UserCreate(
            username=username,
            email=fake.unique.safe_email(),
            password=FAKE_PASSWORD,
            full_name=fake.name(),
        )
        try:
            new_user = create_user(db=db, user=user_in)
        except SelfPressError as e:
            logger.warning(f"  ({i+1}/{NUM_FAKE_USERS}) Could not create {username}: {e.message}")
            continue
        user_ids.append(new_user.id)
        logger.info(f"  ({i+1}/{NUM_FAKE_USERS}) User created: {new_user.username} (ID: {new_user.id})")
    return user_ids

def generate_data() -> None:
    """
    Creates fake users, then reviews and orders for existing books.
    """
    db: Optional[Session] = None
    try:
        init_db()
        db = SessionLocal()

        logger.info(f"--- Phase 1: creating {NUM_FAKE_USERS} fake users ---")
        user_ids = _fake_users(db)
        if not user_ids:
            logger.error("No users could be created or found. Aborting.")
            return

        logger.info("--- Phase 2: loading the catalogue ---")
        books = db.query(Book.id, Book.price).all()
        if not books:
            logger.error("There are no books in the database. Run scripts/seed_db.py first.")
            return
        book_ids: List[int] = [book.id for book in books]
        prices = {book.id: book.price for book in books}
        logger.info(f"Found {len(book_ids)} books.")

        logger.info("--- Phase 3: reviews and orders ---")
        total_reviews = 0
        total_orders = 0
        for user_id in user_ids:
            user = db.get(User, user_id)
            num_reviews = min(random.randint(MIN_REVIEWS_PER_USER, MAX_REVIEWS_PER_USER), len(book_ids))
            for book_id in random.sample(book_ids, num_reviews):
                comment = fake.paragraph(nb_sentences=random.randint(1, 4)) if random.random() < 0.7 else None
                try:
                    create_review(db=db, review=ReviewCreate(rating=random.randint(1, 5), comment=comment),
                                  user_id=user_id, book_id=book_id)
                    total_reviews += 1
                except SelfPressError as e:
                    logger.warning(f"  Review for user {user_id}, book {book_id} refused: {e.message}")
            for _ in range(random.randint(0, MAX_ORDERS_PER_USER)):
                basket = random.sample(book_ids, random.randint(1, min(3, len(book_ids))))
                total = sum(prices[book_id] for book_id in basket)
                try:
                    complete_order(db, user, book_ids=basket, total=total)
                    total_orders += 1
                except SelfPressError as e:
                    logger.warning(f"  Order for user {user_id} refused: {e.message}")
        logger.info(f"--- Finished: {total_reviews} reviews and {total_orders} orders added ---")

    except Exception as e:
        logger.exception(f"Critical error while generating data: {e}")
        if db:
            db.rollback()
    finally:
        if db:
            logger.info("Closing database session.")
            db.close()

if __name__ == "__main__":
    generate_data()
