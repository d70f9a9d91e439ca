"""
Admin endpoints: full CRUD over users, books, manuscripts, orders, reviews,
contacts and notifications.

Every route of this router is gated by `require_admin`, attached once at
registration.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ... import crud
from ...core.exceptions import NotFound
from ...db.session import get_db
from ...schemas.book import BookCreate, BookSchema, BookUpdate
from ...schemas.contact import ContactSchema
from ...schemas.manuscript import ManuscriptAdminUpdate, ManuscriptSchema
from ...schemas.notification import NotificationCreate, NotificationSchema, NotificationUpdate
from ...schemas.order import OrderSchema, OrderStatusUpdate
from ...schemas.review import ReviewSchema
from ...schemas.user import UserAdminUpdate, UserSchema
from ...services import checkout
from ..deps import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Users ---

@router.get("/users", response_model=List[UserSchema])
def list_users(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_users(db, skip=skip, limit=limit)


@router.get("/users/{user_id}", response_model=UserSchema)
def read_user(user_id: int, db: Session = Depends(get_db)):
    user = crud.get_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user


@router.patch("/users/{user_id}", response_model=UserSchema)
def update_user(user_id: int, changes: UserAdminUpdate, db: Session = Depends(get_db)):
    return crud.admin_update_user(db, user_id, changes)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    crud.delete_user(db, user_id)
    return _no_content()


# --- Books ---

@router.get("/books", response_model=List[BookSchema])
def list_books(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_books(db, skip=skip, limit=limit)


@router.post("/books", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def publish_book(book: BookCreate, db: Session = Depends(get_db)):
    return crud.create_book(db, book)


@router.patch("/books/{book_id}", response_model=BookSchema)
def update_book(book_id: int, changes: BookUpdate, db: Session = Depends(get_db)):
    return crud.update_book(db, book_id, changes)


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, db: Session = Depends(get_db)):
    crud.delete_book(db, book_id)
    return _no_content()


# --- Manuscripts ---

@router.get("/manuscripts", response_model=List[ManuscriptSchema])
def list_manuscripts(status: Optional[str] = None, skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_all_manuscripts(db, status=status, skip=skip, limit=limit)


@router.get("/manuscripts/{manuscript_id}", response_model=ManuscriptSchema)
def read_manuscript(manuscript_id: int, db: Session = Depends(get_db)):
    manuscript = crud.get_manuscript(db, manuscript_id)
    if not manuscript:
        raise NotFound("Manuscript not found")
    return manuscript


@router.patch("/manuscripts/{manuscript_id}", response_model=ManuscriptSchema)
def update_manuscript(manuscript_id: int, changes: ManuscriptAdminUpdate, db: Session = Depends(get_db)):
    return crud.admin_update_manuscript(db, manuscript_id, changes)


@router.patch("/manuscripts/{manuscript_id}/approve", response_model=ManuscriptSchema)
def approve_manuscript(manuscript_id: int, db: Session = Depends(get_db)):
    return crud.approve_manuscript(db, manuscript_id)


@router.delete("/manuscripts/{manuscript_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_manuscript(manuscript_id: int, db: Session = Depends(get_db)):
    crud.delete_manuscript(db, manuscript_id)
    return _no_content()


# --- Orders ---

@router.get("/orders", response_model=List[OrderSchema])
def list_orders(status: Optional[str] = None, skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_all_orders(db, status=status, skip=skip, limit=limit)


@router.get("/orders/{order_id}", response_model=OrderSchema)
def read_order(order_id: int, db: Session = Depends(get_db)):
    order = crud.get_order(db, order_id)
    if not order:
        raise NotFound("Order not found")
    return order


@router.patch("/orders/{order_id}", response_model=OrderSchema)
def update_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)):
    return checkout.update_order_status(db, order_id, payload.status)


# Path used by the admin dashboard client.
router.add_api_route(
    "/orders/{order_id}/status",
    update_order_status,
    methods=["PATCH"],
    response_model=OrderSchema,
    name="update_order_status_legacy",
)


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    crud.delete_order(db, order_id)
    return _no_content()


# --- Reviews ---

@router.get("/reviews", response_model=List[ReviewSchema])
def list_reviews(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_all_reviews_admin(db, skip=skip, limit=limit)


@router.delete("/reviews/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_review(review_id: int, db: Session = Depends(get_db)):
    crud.delete_review(db, review_id)
    return _no_content()


# --- Contacts ---

@router.get("/contacts", response_model=List[ContactSchema])
def list_contacts(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_contacts(db, skip=skip, limit=limit)


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    crud.delete_contact(db, contact_id)
    return _no_content()


# --- Notifications ---

@router.get("/notifications", response_model=List[NotificationSchema])
def list_notifications(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_all_notifications(db, skip=skip, limit=limit)


@router.post("/notifications", response_model=NotificationSchema, status_code=status.HTTP_201_CREATED)
def send_notification(notification: NotificationCreate, db: Session = Depends(get_db)):
    return crud.create_notification(db, notification)


@router.patch("/notifications/{notification_id}", response_model=NotificationSchema)
def update_notification(notification_id: int, changes: NotificationUpdate, db: Session = Depends(get_db)):
    return crud.update_notification(db, notification_id, changes)


@router.delete("/notifications/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(notification_id: int, db: Session = Depends(get_db)):
    crud.delete_notification(db, notification_id)
    return _no_content()
