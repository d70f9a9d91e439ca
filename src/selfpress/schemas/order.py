"""
Pydantic schemas for checkout and orders.

Range checks on `book_ids` and `total` happen in the checkout service so that
they surface as InvalidBookIds / InvalidTotal; the schemas only enforce types.
"""

import datetime
from typing import List, Optional

from .base import CamelModel, ORMCamelModel

class PaymentIntentRequest(CamelModel):
    amount: Optional[float] = None

class PaymentIntentResponse(CamelModel):
    client_secret: str
    payment_intent_id: str
    is_mock_payment: bool = False

class CompleteOrderRequest(CamelModel):
    """
    Attributes:
        book_ids (List[int]): Purchased books.
        total (int): Amount paid in minor currency units.
        payment_intent_id (Optional[str]): Intent returned by
            create-payment-intent; when given, the intent can complete only
            one order.
    """
    book_ids: List[int]
    total: int
    payment_intent_id: Optional[str] = None

class OrderStatusUpdate(CamelModel):
    status: str

class OrderSchema(ORMCamelModel):
    id: int
    user_id: int
    book_ids: List[int]
    total: int
    status: str
    payment_intent_id: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
