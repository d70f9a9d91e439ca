"""
CRUD operations for the Order and PaymentIntent models.

These functions only persist; the checkout rules (validation, idempotency,
status transitions) live in selfpress.services.checkout.
"""

import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import NotFound
from ..models.order import Order, OrderStatus
from ..models.payment_intent import PaymentIntent, PaymentIntentStatus
from .base import commit_or_rollback

logger = logging.getLogger(__name__)

def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.get(Order, order_id)

def get_orders_for_user(db: Session, user_id: int) -> List[Order]:
    """Orders placed by a user, newest first."""
    return db.query(Order).\
            filter(Order.user_id == user_id).\
            order_by(desc(Order.created_at), desc(Order.id)).all()

def get_all_orders(db: Session, status: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Order]:
    query = db.query(Order)
    if status:
        query = query.filter(Order.status == status)
    return query.order_by(desc(Order.id)).offset(skip).limit(limit).all()

def set_order_status(db: Session, order_id: int, status: OrderStatus) -> Order:
    """
    Overwrites an order's status.

    Raises:
        NotFound: If the order does not exist.
    """
    db_order = get_order(db, order_id)
    if not db_order:
        raise NotFound("Order not found")
    previous = db_order.status
    db_order.status = status.value
    commit_or_rollback(db, f"status update of order {order_id}")
    db.refresh(db_order)
    logger.info(f"Order {order_id} status changed from '{previous}' to '{db_order.status}'.")
    return db_order

def delete_order(db: Session, order_id: int) -> None:
    db_order = get_order(db, order_id)
    if not db_order:
        raise NotFound("Order not found")
    db.delete(db_order)
    commit_or_rollback(db, f"deletion of order {order_id}")
    logger.info(f"Order {order_id} deleted.")

def get_payment_intent(db: Session, intent_id: str) -> Optional[PaymentIntent]:
    return db.get(PaymentIntent, intent_id)

def create_payment_intent_record(
    db: Session,
    intent_id: str,
    user_id: int,
    amount: int,
    currency: str,
    client_secret: str,
    is_mock: bool = False,
) -> PaymentIntent:
    db_intent = PaymentIntent(
        id=intent_id,
        user_id=user_id,
        amount=amount,
        currency=currency,
        client_secret=client_secret,
        status=PaymentIntentStatus.INTENT_CREATED.value,
        is_mock=is_mock,
    )
    db.add(db_intent)
    commit_or_rollback(db, f"payment intent {intent_id}")
    db.refresh(db_intent)
    return db_intent
