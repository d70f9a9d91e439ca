"""
Seeds the SelfPress database with a starter catalogue.

Creates the tables if needed and adds each catalogue book unless a book with
the same title already exists, so the script can be run repeatedly. Accounts
registered with an email listed in ADMIN_EMAILS are then promoted to admin;
this is the only way to create the first admin.

Usage:
    python scripts/seed_db.py
"""

import logging
import sys
from typing import Any, Dict, List, Optional

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

try:
    from sqlalchemy.orm import Session
    from selfpress.db.session import SessionLocal, init_db
    from selfpress.models.book import Book
    from selfpress.core.config import settings
    from selfpress.crud.crud_book import create_book
    from selfpress.crud.crud_user import promote_admin_emails
    from selfpress.schemas.book import BookCreate
except ImportError as e:
    logger.error(f"Error importing project modules: {e}.")
    logger.error("Make sure the project is installed with 'pip install -e .'")
    sys.exit(1)

# Prices in cents.
CATALOGUE: List[Dict[str, Any]] = [
    {"title": "The Last Chapter", "genre": "Mystery", "price": 999,
     "description": "A thrilling novel about the final mysteries of a legendary author."},
    {"title": "Beyond The Horizon", "genre": "Science Fiction", "price": 1299,
     "description": "An epic journey across galaxies in search of humanity's new home."},
    {"title": "Midnight Echo", "genre": "Fantasy", "price": 799,
     "description": "A supernatural tale of whispers that come alive at the stroke of midnight."},
    {"title": "Silent Whispers", "genre": "Fiction", "price": 1099,
     "description": "A woman discovers she can hear the thoughts of others, changing her life forever."},
    {"title": "The Business of Success", "genre": "Business", "price": 1499,
     "description": "Learn the principles that drive successful entrepreneurs and companies."},
    {"title": "Love in Paris", "genre": "Romance", "price": 899,
     "description": "A passionate romance set against the backdrop of the city of lights."},
    {"title": "Ancient Mysteries", "genre": "Non-Fiction", "price": 1199,
     "description": "Explore the most enigmatic historical puzzles that still baffle experts."},
    {"title": "The Detective's Dilemma", "genre": "Mystery", "price": 999,
     "description": "A complex case pushes a veteran detective to the edge of his abilities and ethics."},
]

def seed_books(db: Session) -> int:
    """
    Adds the catalogue books that are not in the database yet.

    Args:
        db (Session): Active SQLAlchemy session.

    Returns:
        int: Number of books added.
    """
    added = 0
    for entry in CATALOGUE:
        if db.query(Book).filter(Book.title == entry["title"]).first():
            logger.info(f"Book already exists: '{entry['title']}'. Skipping.")
            continue
        book = create_book(db, BookCreate(**entry))
        added += 1
        logger.info(f"  Added: '{book.title}' (ID: {book.id})")
    return added

if __name__ == "__main__":
    db_session: Optional[Session] = None
    try:
        init_db()
        logger.info("Opening database session for seeding...")
        db_session = SessionLocal()
        total = seed_books(db_session)
        logger.info(f"--- Seeding finished: {total} books added. ---")
        promoted = promote_admin_emails(db_session, settings.list_admin_emails)
        logger.info(f"--- Admin promotion finished: {len(promoted)} accounts promoted. ---")
    except Exception as main_exc:
        logger.exception(f"Critical error while seeding: {main_exc}")
        sys.exit(1)
    finally:
        if db_session:
            logger.info("Closing database session.")
            db_session.close()
