from .user import User
from .book import Book
from .manuscript import Manuscript, ManuscriptStatus
from .order import Order, OrderStatus
from .payment_intent import PaymentIntent, PaymentIntentStatus
from .review import Review
from .contact import Contact
from .notification import Notification, NotificationType

__all__ = [
    "User",
    "Book",
    "Manuscript",
    "ManuscriptStatus",
    "Order",
    "OrderStatus",
    "PaymentIntent",
    "PaymentIntentStatus",
    "Review",
    "Contact",
    "Notification",
    "NotificationType",
]
