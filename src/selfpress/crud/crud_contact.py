"""
CRUD operations for contact form messages.
"""

import logging
from typing import List

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import NotFound
from ..models.contact import Contact
from ..schemas.contact import ContactCreate
from .base import commit_or_rollback

logger = logging.getLogger(__name__)

def create_contact(db: Session, contact: ContactCreate) -> Contact:
    db_contact = Contact(**contact.model_dump())
    db.add(db_contact)
    commit_or_rollback(db, "contact message")
    db.refresh(db_contact)
    logger.info(f"Contact message {db_contact.id} received: '{db_contact.subject}'")
    return db_contact

def get_contacts(db: Session, skip: int = 0, limit: int = 100) -> List[Contact]:
    return db.query(Contact).order_by(desc(Contact.created_at), desc(Contact.id)).offset(skip).limit(limit).all()

def delete_contact(db: Session, contact_id: int) -> None:
    db_contact = db.get(Contact, contact_id)
    if not db_contact:
        raise NotFound("Contact not found")
    db.delete(db_contact)
    commit_or_rollback(db, f"deletion of contact {contact_id}")
