from .crud_user import (
    get_user,
    get_user_by_username,
    get_user_by_email,
    create_user,
    authenticate_user,
    get_users,
    update_profile,
    admin_update_user,
    promote_admin_emails,
    delete_user,
)
from .crud_book import (
    get_books,
    search_books,
    get_book_by_id,
    get_books_by_genre,
    get_books_by_author,
    create_book,
    update_book,
    delete_book,
)
from .crud_review import (
    rounded_mean,
    create_review,
    get_reviews_for_book,
    get_review_by_id,
    get_all_reviews_admin,
    delete_review,
    recompute_book_rating,
)
from .crud_manuscript import (
    get_manuscript,
    get_manuscripts_for_author,
    get_all_manuscripts,
    create_manuscript,
    update_own_manuscript,
    admin_update_manuscript,
    approve_manuscript,
    delete_manuscript,
)
from .crud_order import (
    get_order,
    get_orders_for_user,
    get_all_orders,
    set_order_status,
    delete_order,
    get_payment_intent,
    create_payment_intent_record,
)
from .crud_contact import create_contact, get_contacts, delete_contact
from .crud_notification import (
    get_notification,
    get_notifications_for_user,
    get_all_notifications,
    create_notification,
    update_notification,
    mark_notification_read,
    mark_all_notifications_read,
    delete_notification,
)

__all__ = [
    "get_user",
    "get_user_by_username",
    "get_user_by_email",
    "create_user",
    "authenticate_user",
    "get_users",
    "update_profile",
    "admin_update_user",
    "promote_admin_emails",
    "delete_user",
    "get_books",
    "search_books",
    "get_book_by_id",
    "get_books_by_genre",
    "get_books_by_author",
    "create_book",
    "update_book",
    "delete_book",
    "rounded_mean",
    "create_review",
    "get_reviews_for_book",
    "get_review_by_id",
    "get_all_reviews_admin",
    "delete_review",
    "recompute_book_rating",
    "get_manuscript",
    "get_manuscripts_for_author",
    "get_all_manuscripts",
    "create_manuscript",
    "update_own_manuscript",
    "admin_update_manuscript",
    "approve_manuscript",
    "delete_manuscript",
    "get_order",
    "get_orders_for_user",
    "get_all_orders",
    "set_order_status",
    "delete_order",
    "get_payment_intent",
    "create_payment_intent_record",
    "create_contact",
    "get_contacts",
    "delete_contact",
    "get_notification",
    "get_notifications_for_user",
    "get_all_notifications",
    "create_notification",
    "update_notification",
    "mark_notification_read",
    "mark_all_notifications_read",
    "delete_notification",
]
