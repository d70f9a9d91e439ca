# tests/api/test_notifications_api.py
import pytest

from selfpress.models.contact import Contact
from selfpress.models.notification import Notification

@pytest.fixture
def inbox(db_session, reader, other_reader):
    notifications = [
        Notification(user_id=reader.id, title="Order shipped", message="On its way"),
        Notification(user_id=reader.id, title="New review", message="Someone reviewed your book", type="success"),
        Notification(user_id=other_reader.id, title="Not yours", message="Private"),
    ]
    db_session.add_all(notifications)
    db_session.commit()
    return notifications

def test_list_own_notifications(client, reader, inbox, auth_headers):
    response = client.get("/api/notifications", headers=auth_headers(reader))

    assert response.status_code == 200
    assert {n["title"] for n in response.json()} == {"Order shipped", "New review"}
    assert all(n["isRead"] is False for n in response.json())

def test_mark_notification_read(client, reader, inbox, auth_headers):
    response = client.patch(f"/api/notifications/{inbox[0].id}/read", headers=auth_headers(reader))

    assert response.status_code == 200
    assert response.json()["isRead"] is True

def test_cannot_mark_other_users_notification(client, db_session, reader, inbox, auth_headers):
    response = client.patch(f"/api/notifications/{inbox[2].id}/read", headers=auth_headers(reader))

    assert response.status_code == 404
    db_session.refresh(inbox[2])
    assert inbox[2].is_read is False

def test_mark_all_read(client, db_session, reader, inbox, auth_headers):
    response = client.patch("/api/notifications/read-all", headers=auth_headers(reader))

    assert response.status_code == 200
    assert response.json()["updated"] == 2
    unread = db_session.query(Notification).filter(Notification.is_read == False).all()  # noqa: E712
    assert [n.title for n in unread] == ["Not yours"]

def test_notifications_require_authentication(client):
    assert client.get("/api/notifications").status_code == 401
    assert client.patch("/api/notifications/read-all").status_code == 401

def test_contact_form(client, db_session):
    response = client.post("/api/contact", json={
        "name": "Ada", "email": "ada@example.com", "subject": "Rights", "message": "Who handles translations?",
    })

    assert response.status_code == 201
    assert response.json()["message"] == "Message sent successfully"
    assert db_session.get(Contact, response.json()["id"]).subject == "Rights"

def test_contact_form_validation(client, db_session):
    response = client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com"})

    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"subject", "message"}
    assert db_session.query(Contact).count() == 0
