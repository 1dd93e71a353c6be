"""
Tests for checkout, order history and admin order management
"""
import logging
from unittest.mock import patch

from artverse.models import Artwork, Cart, Course, Notification


def checkout(client, user, items, reference="pay_001", **extra):
    return client.post(
        "/api/orders",
        json={"items": items, "payment_reference": reference, **extra},
        headers=user["headers"],
    )


def notification_types(db_session, user_id):
    db_session.expire_all()
    return sorted(n.type for n in db_session.query(Notification).filter_by(user_id=user_id))


class TestCreateOrder:
    def test_order_total_and_summary(self, client, buyer, artist, make_artwork, make_course):
        artwork_id = make_artwork(artist["id"], price="100.00", stock=3)
        course_id = make_course(artist["id"], price="49.00")

        response = checkout(client, buyer, [
            {"item_type": "artwork", "item_id": artwork_id, "quantity": 2},
            {"item_type": "course", "item_id": course_id},
        ])

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total"] == 249.0
        assert data["item_count"] == 2
        assert data["status"] == "completed"

    def test_artwork_stock_decremented_and_sold_out(self, client, buyer, artist, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"], stock=1)

        checkout(client, buyer, [{"item_type": "artwork", "item_id": artwork_id}])

        db_session.expire_all()
        artwork = db_session.get(Artwork, artwork_id)
        assert artwork.stock == 0
        assert artwork.status == "sold"

    def test_course_purchase_enrols_buyer(self, client, buyer, artist, make_course, db_session):
        course_id = make_course(artist["id"])

        checkout(client, buyer, [{"item_type": "course", "item_id": course_id}])

        db_session.expire_all()
        assert db_session.get(Course, course_id).is_enrolled(buyer["id"])

    def test_buyer_and_artist_notified(self, client, buyer, artist, make_artwork, make_course, db_session):
        artwork_id = make_artwork(artist["id"], stock=2)
        course_id = make_course(artist["id"])

        checkout(client, buyer, [
            {"item_type": "artwork", "item_id": artwork_id},
            {"item_type": "course", "item_id": course_id},
        ])

        assert notification_types(db_session, buyer["id"]) == ["purchase"]
        assert notification_types(db_session, artist["id"]) == ["artwork_sold", "course_enrollment"]

    def test_purchased_items_removed_from_cart(self, client, buyer, artist, make_artwork, db_session):
        bought = make_artwork(artist["id"], title="Bought")
        kept = make_artwork(artist["id"], title="Kept")
        for item_id in (bought, kept):
            client.post("/api/cart", json={"item_id": item_id}, headers=buyer["headers"])

        checkout(client, buyer, [{"item_type": "artwork", "item_id": bought}])

        db_session.expire_all()
        cart = db_session.query(Cart).filter_by(user_id=buyer["id"]).one()
        assert [line.item_id for line in cart.items] == [kept]

    def test_duplicate_payment_reference(self, client, buyer, artist, make_course):
        course_id = make_course(artist["id"])
        checkout(client, buyer, [{"item_type": "course", "item_id": course_id}], reference="pay_dup")

        response = checkout(client, buyer, [{"item_type": "course", "item_id": course_id}], reference="pay_dup")

        assert response.status_code == 400
        assert response.json()["error"] == "Payment reference already used"

    def test_insufficient_stock_across_lines(self, client, buyer, artist, make_artwork):
        artwork_id = make_artwork(artist["id"], stock=2, title="Dunes")

        response = checkout(client, buyer, [
            {"item_type": "artwork", "item_id": artwork_id, "quantity": 2},
            {"item_type": "artwork", "item_id": artwork_id},
        ])

        assert response.status_code == 400
        assert response.json()["error"] == 'Only 2 available in stock for "Dunes"'

    def test_wrong_item_type(self, client, buyer, artist, make_artwork):
        artwork_id = make_artwork(artist["id"])

        response = checkout(client, buyer, [{"item_type": "course", "item_id": artwork_id}])

        assert response.status_code == 400
        assert response.json()["error"] == f"course not found or not available: {artwork_id}"

    def test_empty_items(self, client, buyer):
        response = checkout(client, buyer, [])

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_shipping_address_stored(self, client, buyer, artist, make_artwork):
        artwork_id = make_artwork(artist["id"])
        address = {"street": "1 Quay St", "city": "Cork", "state": "Munster", "country": "IE", "postal_code": "T12"}

        checkout(client, buyer, [{"item_type": "artwork", "item_id": artwork_id}], shipping_address=address)
        history = client.get("/api/orders/history", headers=buyer["headers"]).json()["data"]

        assert history[0]["shipping_address"]["city"] == "Cork"


class TestOrderHistory:
    def test_history_lists_own_orders_newest_first(self, client, buyer, artist, make_course):
        other = make_course(artist["id"], title="Second")
        first = make_course(artist["id"], title="First")
        checkout(client, buyer, [{"item_type": "course", "item_id": first}], reference="pay_a")
        checkout(client, buyer, [{"item_type": "course", "item_id": other}], reference="pay_b")

        response = client.get("/api/orders/history", headers=buyer["headers"])

        data = response.json()["data"]
        assert [order["payment_reference"] for order in data] == ["pay_b", "pay_a"]
        assert data[0]["items"][0]["title"] == "Second"
        assert data[0]["items"][0]["line_total"] == 49.0


class TestAdminOrders:
    def test_admin_lists_all_orders(self, client, buyer, artist, admin, make_course):
        checkout(client, buyer, [{"item_type": "course", "item_id": make_course(artist["id"])}])

        response = client.get("/api/orders", headers=admin["headers"])

        body = response.json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["buyer"]["email"] == buyer["email"]

    def test_buyer_cannot_list_all(self, client, buyer):
        response = client.get("/api/orders", headers=buyer["headers"])

        assert response.status_code == 403

    def test_status_update_notifies_buyer(self, client, buyer, artist, admin, make_artwork, db_session):
        order_id = checkout(
            client, buyer, [{"item_type": "artwork", "item_id": make_artwork(artist["id"])}]
        ).json()["data"]["id"]

        response = client.patch(
            f"/api/orders/{order_id}/status",
            json={"status": "shipped", "payout_status": "processed"},
            headers=admin["headers"],
        )

        data = response.json()["data"]
        assert data["status"] == "shipped"
        assert data["payout_status"] == "processed"
        assert notification_types(db_session, buyer["id"]) == ["order_update", "purchase"]

    def test_status_update_requires_a_field(self, client, admin):
        response = client.patch(
            "/api/orders/00000000-0000-4000-8000-000000000000/status", json={}, headers=admin["headers"]
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Either status or payout_status must be provided"

    def test_status_update_unknown_order(self, client, admin):
        response = client.patch(
            "/api/orders/00000000-0000-4000-8000-000000000000/status",
            json={"status": "shipped"},
            headers=admin["headers"],
        )

        assert response.status_code == 404

    def test_status_update_accepts_upper_case_id(self, client, buyer, artist, admin, make_course, db_session):
        course_id = make_course(artist["id"])
        order_id = checkout(client, buyer, [{"item_type": "course", "item_id": course_id}]).json()["data"]["id"]

        response = client.patch(
            f"/api/orders/{order_id.upper()}/status", json={"status": "shipped"}, headers=admin["headers"]
        )

        assert response.status_code == 200
        assert response.json()["data"]["id"] == order_id
        db_session.expire_all()
        note = db_session.query(Notification).filter_by(user_id=buyer["id"], type="order_update").one()
        assert note.meta == {"order_id": order_id}

    def test_status_update_malformed_id(self, client, admin):
        response = client.patch("/api/orders/not-an-id/status", json={"status": "shipped"}, headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid order ID"


class TestItemIdNormalisation:
    def test_upper_case_id_from_cart_checks_out(self, client, buyer, artist, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"], stock=2)
        added = client.post("/api/cart", json={"item_id": artwork_id.upper()}, headers=buyer["headers"])

        response = checkout(client, buyer, [{"item_type": "artwork", "item_id": artwork_id.upper()}])

        assert added.status_code == 201
        assert response.status_code == 201
        history = client.get("/api/orders/history", headers=buyer["headers"]).json()["data"]
        assert history[0]["items"][0]["item_id"] == artwork_id
        db_session.expire_all()
        assert db_session.get(Artwork, artwork_id).stock == 1
        assert db_session.query(Cart).filter_by(user_id=buyer["id"]).one().items == []

    def test_malformed_id_names_the_item(self, client, buyer):
        response = checkout(client, buyer, [{"item_type": "artwork", "item_id": "abc"}])

        assert response.status_code == 400
        assert response.json()["error"] == "artwork not found or not available: abc"


class TestPostOrderActionFailures:
    def test_failed_artwork_fulfilment_does_not_block_the_rest(
        self, client, buyer, artist, make_artwork, make_course, db_session, caplog
    ):
        artwork_id = make_artwork(artist["id"], stock=2)
        course_id = make_course(artist["id"])
        for item_id in (artwork_id, course_id):
            client.post("/api/cart", json={"item_id": item_id}, headers=buyer["headers"])
        caplog.set_level(logging.ERROR)

        with patch("artverse.services.order_service.OrderService._fulfil_artwork", side_effect=RuntimeError("boom")):
            response = checkout(client, buyer, [
                {"item_type": "artwork", "item_id": artwork_id},
                {"item_type": "course", "item_id": course_id},
            ])

        assert response.status_code == 201
        db_session.expire_all()
        assert db_session.get(Course, course_id).is_enrolled(buyer["id"])
        assert db_session.get(Artwork, artwork_id).stock == 2
        assert db_session.query(Cart).filter_by(user_id=buyer["id"]).one().items == []
        assert f"Post-order action failed for artwork {artwork_id}" in caplog.text

    def test_failed_notifications_do_not_fail_checkout(self, client, buyer, artist, make_artwork, db_session, caplog):
        artwork_id = make_artwork(artist["id"], stock=2)
        caplog.set_level(logging.ERROR)

        with patch("artverse.services.order_service.NotificationService.notify", side_effect=RuntimeError("down")):
            response = checkout(client, buyer, [{"item_type": "artwork", "item_id": artwork_id}])

        assert response.status_code == 201
        assert notification_types(db_session, buyer["id"]) == []
        assert db_session.get(Artwork, artwork_id).stock == 1
        assert "Failed to create 'purchase' notification" in caplog.text
        assert "Failed to create 'artwork_sold' notification" in caplog.text
