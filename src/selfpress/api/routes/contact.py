from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...crud import create_contact
from ...db.session import get_db
from ...schemas.contact import ContactCreate, ContactReceipt

router = APIRouter(prefix="/api", tags=["contact"])


@router.post("/contact", response_model=ContactReceipt, status_code=status.HTTP_201_CREATED)
def send_contact_message(payload: ContactCreate, db: Session = Depends(get_db)):
    contact = create_contact(db, payload)
    return ContactReceipt(id=contact.id)
