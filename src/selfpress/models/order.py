"""
ORM model for the Order entity.

An order is created once per completed checkout. `status` is the single
source of truth for both fulfilment and payment state.
"""

import enum

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, CheckConstraint, func
from sqlalchemy.orm import relationship
from selfpress.db.session import Base


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Values an admin may write through the status endpoint.
ADMIN_SETTABLE_STATUSES = {
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
}


class Order(Base):
    """
    A purchase.

    Attributes:
        id (int): Primary key.
        user_id (int): Purchasing user.
        book_ids (List[int]): Purchased books, never empty.
        total (int): Amount paid in minor currency units, always positive.
        status (str): One of OrderStatus.
        payment_intent_id (str): Payment intent consumed by this order, if any.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    book_ids = Column(JSON, nullable=False)
    total = Column(Integer, nullable=False)
    status = Column(String(32), default=OrderStatus.PENDING.value, nullable=False, index=True)
    payment_intent_id = Column(String(255), ForeignKey("payment_intents.id"), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="orders")
    payment_intent = relationship("PaymentIntent", back_populates="order")

    __table_args__ = (
        CheckConstraint('total > 0', name='order_total_check'),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, user_id={self.user_id}, total={self.total}, status='{self.status}')>"
