"""
Checkout workflow: payment intent, order completion and order status.

The intent created here is the idempotency token of the purchase: once an
order has been completed for it, later completions with the same intent are
refused with DuplicateOrder.

Payment intent states: intent_created -> payment_confirmed -> order_created.
Order states: pending -> completed on checkout; admins may then set
processing, shipped, completed or cancelled.
"""

import logging
import math
import numbers
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..clients.payments import StripePaymentClient
from ..core.config import settings
from ..core.exceptions import (
    DuplicateOrder,
    Forbidden,
    InvalidAmount,
    InvalidBookIds,
    InvalidStatus,
    InvalidTotal,
    NotFound,
)
from ..crud.base import commit_or_rollback
from ..crud.crud_order import create_payment_intent_record, get_payment_intent, set_order_status
from ..models.order import ADMIN_SETTABLE_STATUSES, Order, OrderStatus
from ..models.payment_intent import PaymentIntent, PaymentIntentStatus
from ..models.user import User

logger = logging.getLogger(__name__)

# Largest amount the provider accepts, in minor units.
MAX_AMOUNT_MINOR = 99_999_999


def to_minor_units(amount: float) -> int:
    """Converts a major-unit amount (e.g. dollars) to minor units (cents)."""
    return int(round(amount * 100))


async def create_payment_intent(
    db: Session,
    user: User,
    amount,
    client: StripePaymentClient,
) -> PaymentIntent:
    """
    Creates a payment intent with the provider and records it.

    Args:
        db (Session): SQLAlchemy session.
        user (User): Authenticated buyer.
        amount: Cart total in major currency units.
        client (StripePaymentClient): Payment provider client.

    Returns:
        PaymentIntent: The stored intent, holding the client secret.

    Raises:
        InvalidAmount: If amount is not a positive finite number or
            exceeds MAX_AMOUNT_MINOR once converted.
        PaymentProviderError: If the provider call fails.
    """
    if (
        isinstance(amount, bool)
        or not isinstance(amount, numbers.Real)
        or not math.isfinite(amount)
        or amount <= 0
    ):
        raise InvalidAmount()
    amount_minor = to_minor_units(amount)
    if amount_minor <= 0:
        raise InvalidAmount()
    if amount_minor > MAX_AMOUNT_MINOR:
        raise InvalidAmount("Amount exceeds the maximum allowed")

    result = await client.create_payment_intent(amount_minor, settings.PAYMENT_CURRENCY)
    # The session is synchronous; keep the commit off the event loop.
    intent = await run_in_threadpool(
        create_payment_intent_record,
        db,
        intent_id=result.id,
        user_id=user.id,
        amount=amount_minor,
        currency=settings.PAYMENT_CURRENCY,
        client_secret=result.client_secret,
        is_mock=result.is_mock,
    )
    logger.info(f"Payment intent {intent.id} recorded for user {user.id} ({amount_minor} {intent.currency}).")
    return intent


def _validate_book_ids(book_ids) -> List[int]:
    if not isinstance(book_ids, (list, tuple)) or len(book_ids) == 0:
        raise InvalidBookIds()
    for book_id in book_ids:
        if isinstance(book_id, bool) or not isinstance(book_id, int) or book_id <= 0:
            raise InvalidBookIds("Book IDs must be positive integers")
    return list(book_ids)


def _validate_total(total) -> int:
    if isinstance(total, bool) or not isinstance(total, int) or total <= 0:
        raise InvalidTotal()
    return total


def _claim_payment_intent(db: Session, user: User, payment_intent_id: str, total: int) -> PaymentIntent:
    intent = get_payment_intent(db, payment_intent_id)
    if not intent:
        raise NotFound("Payment intent not found")
    if intent.user_id != user.id:
        logger.warning(f"User {user.id} tried to complete an order with intent {intent.id} of user {intent.user_id}")
        raise Forbidden("Payment intent belongs to another user")
    if intent.status == PaymentIntentStatus.ORDER_CREATED.value or intent.order is not None:
        logger.warning(f"Duplicate order completion refused for payment intent {intent.id}")
        raise DuplicateOrder()
    if intent.amount != total:
        logger.warning(f"Order total {total} does not match payment intent {intent.id} amount {intent.amount}")
        raise InvalidTotal("Total does not match the payment amount")
    intent.status = PaymentIntentStatus.PAYMENT_CONFIRMED.value
    return intent


def complete_order(
    db: Session,
    user: User,
    book_ids,
    total,
    payment_intent_id: Optional[str] = None,
) -> Order:
    """
    Records a completed purchase.

    The order is created as pending and moved to completed in the same
    transaction; there is no wait for a provider webhook.

    Args:
        db (Session): SQLAlchemy session.
        user (User): Authenticated buyer.
        book_ids: Non-empty list of book ids.
        total: Positive amount in minor currency units.
        payment_intent_id (Optional[str]): Intent being paid; each intent
            completes at most one order.

    Returns:
        Order: The completed order.

    Raises:
        InvalidBookIds: If book_ids is empty or malformed.
        InvalidTotal: If total is not a positive integer, or differs from
            the amount of the payment intent.
        NotFound: If the payment intent does not exist.
        Forbidden: If the payment intent belongs to another user.
        DuplicateOrder: If the payment intent already completed an order.
    """
    book_ids = _validate_book_ids(book_ids)
    total = _validate_total(total)

    intent = None
    if payment_intent_id is not None:
        intent = _claim_payment_intent(db, user, payment_intent_id, total)

    order = Order(
        user_id=user.id,
        book_ids=book_ids,
        total=total,
        status=OrderStatus.PENDING.value,
        payment_intent_id=intent.id if intent else None,
    )
    db.add(order)
    try:
        db.flush()
        order.status = OrderStatus.COMPLETED.value
        if intent is not None:
            intent.status = PaymentIntentStatus.ORDER_CREATED.value
        commit_or_rollback(db, f"order completion for user {user.id}")
    except IntegrityError:
        db.rollback()
        # A concurrent completion won the unique payment_intent_id.
        claimed = get_payment_intent(db, payment_intent_id) if intent is not None else None
        if claimed is not None and claimed.order is not None:
            raise DuplicateOrder()
        raise
    db.refresh(order)
    logger.info(f"Order {order.id} completed for user {user.id}: books {order.book_ids}, total {order.total}.")
    return order


def update_order_status(db: Session, order_id: int, status: str) -> Order:
    """
    Sets an order's status. Any of processing, shipped, completed or
    cancelled may be written regardless of the current status.

    Raises:
        InvalidStatus: If status is not one of the settable values.
        NotFound: If the order does not exist.
    """
    try:
        new_status = OrderStatus(status)
    except ValueError:
        new_status = None
    if new_status not in ADMIN_SETTABLE_STATUSES:
        allowed = ", ".join(sorted(s.value for s in ADMIN_SETTABLE_STATUSES))
        raise InvalidStatus(f"Status must be one of: {allowed}")
    return set_order_status(db, order_id, new_status)
