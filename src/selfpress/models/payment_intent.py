"""
ORM model for payment intents created with the payment provider.

Each intent can be consumed by at most one order, which makes the intent id
the idempotency token of the checkout.
"""

import enum

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from selfpress.db.session import Base


class PaymentIntentStatus(str, enum.Enum):
    INTENT_CREATED = "intent_created"
    PAYMENT_CONFIRMED = "payment_confirmed"
    ORDER_CREATED = "order_created"


class PaymentIntent(Base):
    __tablename__ = "payment_intents"

    id = Column(String(255), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    client_secret = Column(String(255), nullable=False)
    status = Column(String(32), default=PaymentIntentStatus.INTENT_CREATED.value, nullable=False)
    is_mock = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    order = relationship("Order", back_populates="payment_intent", uselist=False)

    def __repr__(self) -> str:
        return f"<PaymentIntent(id='{self.id}', amount={self.amount}, status='{self.status}')>"
