# tests/models/test_order_model.py
import pytest
from sqlalchemy.exc import IntegrityError

from selfpress.models.order import Order
from selfpress.models.payment_intent import PaymentIntent

def test_create_order_defaults(db_session, reader):
    order = Order(user_id=reader.id, book_ids=[1, 2], total=2298)
    db_session.add(order)
    db_session.commit()
    db_session.refresh(order)

    assert order.status == "pending"
    assert order.book_ids == [1, 2]
    assert order.payment_intent_id is None

@pytest.mark.parametrize("total", [0, -100])
def test_order_total_must_be_positive(db_session, reader, total):
    db_session.add(Order(user_id=reader.id, book_ids=[1], total=total))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_payment_intent_completes_one_order(db_session, reader):
    """The payment intent id is unique across orders."""
    db_session.add(PaymentIntent(id="pi_1", user_id=reader.id, amount=999, currency="usd", client_secret="s"))
    db_session.add(Order(user_id=reader.id, book_ids=[1], total=999, payment_intent_id="pi_1"))
    db_session.commit()

    db_session.add(Order(user_id=reader.id, book_ids=[1], total=999, payment_intent_id="pi_1"))
    with pytest.raises(IntegrityError):
        db_session.commit()
