"""
Checkout and the caller's orders.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...clients.payments import StripePaymentClient, get_payment_client
from ...core.exceptions import NotFound
from ...crud import get_order, get_orders_for_user
from ...db.session import get_db
from ...models.user import User
from ...schemas.order import CompleteOrderRequest, OrderSchema, PaymentIntentRequest, PaymentIntentResponse
from ...services import checkout
from ..deps import get_current_user

router = APIRouter(prefix="/api", tags=["orders"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    payload: PaymentIntentRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    client: StripePaymentClient = Depends(get_payment_client),
):
    intent = await checkout.create_payment_intent(db, user, payload.amount, client)
    return PaymentIntentResponse(
        client_secret=intent.client_secret,
        payment_intent_id=intent.id,
        is_mock_payment=intent.is_mock,
    )


@router.post("/complete-order", response_model=OrderSchema, status_code=status.HTTP_201_CREATED)
def complete_order(
    payload: CompleteOrderRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return checkout.complete_order(
        db,
        user,
        book_ids=payload.book_ids,
        total=payload.total,
        payment_intent_id=payload.payment_intent_id,
    )


@router.get("/orders", response_model=List[OrderSchema])
def list_my_orders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_orders_for_user(db, user.id)


@router.get("/orders/{order_id}", response_model=OrderSchema)
def read_order(order_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    order = get_order(db, order_id)
    if not order or (order.user_id != user.id and not user.is_admin):
        raise NotFound("Order not found")
    return order
