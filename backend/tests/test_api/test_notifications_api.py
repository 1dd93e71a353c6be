"""
Tests for the notification inbox and the contact form
"""
from artverse.core.config import settings
from artverse.models import ContactMessage, Notification


def seed(db_session, user_id, count=2):
    for i in range(count):
        db_session.add(Notification(user_id=user_id, type="system", message=f"Note {i}", meta={"n": i}))
    db_session.commit()


class TestNotifications:
    def test_list_with_unread_count(self, client, buyer, db_session):
        seed(db_session, buyer["id"])

        response = client.get("/api/notifications", headers=buyer["headers"])

        body = response.json()
        assert body["unread"] == 2
        assert {n["message"] for n in body["data"]} == {"Note 0", "Note 1"}
        assert body["data"][0]["metadata"] in ({"n": 0}, {"n": 1})

    def test_mark_one_read(self, client, buyer, db_session):
        seed(db_session, buyer["id"])
        first = client.get("/api/notifications", headers=buyer["headers"]).json()["data"][0]

        response = client.patch(f"/api/notifications/{first['id']}/read", headers=buyer["headers"])
        unread = client.get("/api/notifications", params={"unread_only": True}, headers=buyer["headers"]).json()

        assert response.json()["data"]["read"] is True
        assert unread["unread"] == 1
        assert first["id"] not in [n["id"] for n in unread["data"]]

    def test_mark_all_read(self, client, buyer, db_session):
        seed(db_session, buyer["id"], count=3)

        response = client.patch("/api/notifications/read-all", headers=buyer["headers"])

        assert response.json()["data"] == {"updated": 3}
        assert client.get("/api/notifications", headers=buyer["headers"]).json()["unread"] == 0

    def test_cannot_read_someone_elses(self, client, buyer, artist, db_session):
        seed(db_session, artist["id"], count=1)
        note_id = db_session.query(Notification).filter_by(user_id=artist["id"]).one().id

        response = client.patch(f"/api/notifications/{note_id}/read", headers=buyer["headers"])

        assert response.status_code == 404
        assert response.json()["error"] == "Notification not found"


class TestContactForm:
    def test_message_stored(self, client, db_session):
        response = client.post(
            "/api/contact",
            json={"name": "Lee", "email": "lee@example.com", "subject": "Hello", "message": "Love the site"},
        )

        assert response.status_code == 201
        stored = db_session.query(ContactMessage).one()
        assert stored.subject == "Hello"

    def test_all_fields_required(self, client):
        response = client.post("/api/contact", json={"name": "Lee", "email": "lee@example.com", "subject": " "})

        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required"

    def test_rate_limited(self, client):
        payload = {"name": "Lee", "email": "lee@example.com", "subject": "Hi", "message": "Hi"}
        for _ in range(settings.CONTACT_RATE_LIMIT):
            client.post("/api/contact", json=payload)

        response = client.post("/api/contact", json=payload)

        assert response.status_code == 429
