"""
Tests for the artwork endpoints: submission, visibility, edits and moderation
"""
from unittest.mock import patch

from artverse.domain.artwork import ARTWORK_SORTS
from artverse.models import Artwork, Notification


class TestCreateArtwork:
    def test_artist_creates_pending_artwork_and_admins_are_notified(self, client, artist, admin,
                                                                     sample_artwork_data, db_session):
        response = client.post("/api/artworks", json=sample_artwork_data, headers=artist["headers"])

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "pending"
        assert data["tags"] == ["harbour", "sunset"]
        assert data["price"] == 250.0
        assert data["artist"]["name"] == "Ada Artist"

        notes = db_session.query(Notification).filter_by(user_id=admin["id"]).all()
        assert [n.type for n in notes] == ["approval"]

    def test_images_are_required(self, client, artist, sample_artwork_data):
        sample_artwork_data["images"] = []

        response = client.post("/api/artworks", json=sample_artwork_data, headers=artist["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_unknown_category_rejected(self, client, artist, sample_artwork_data):
        sample_artwork_data["category"] = "Ceramics"

        response = client.post("/api/artworks", json=sample_artwork_data, headers=artist["headers"])

        assert response.status_code == 400

    def test_negative_price_rejected(self, client, artist, sample_artwork_data):
        sample_artwork_data["price"] = -1

        response = client.post("/api/artworks", json=sample_artwork_data, headers=artist["headers"])

        assert response.status_code == 400


class TestListArtworks:
    def test_only_approved_by_default(self, client, artist, make_artwork):
        approved_id = make_artwork(artist["id"], status="approved")
        make_artwork(artist["id"], status="pending")

        response = client.get("/api/artworks")

        body = response.json()
        assert [a["id"] for a in body["data"]] == [approved_id]
        assert body["pagination"] == {"total": 1, "page": 1, "pages": 1, "limit": 20}

    def test_anonymous_cannot_list_pending(self, client, artist, make_artwork):
        make_artwork(artist["id"], status="pending")

        response = client.get("/api/artworks", params={"status": "pending"})

        assert response.json()["data"] == []

    def test_artist_lists_own_pending(self, client, artist, make_artwork):
        pending_id = make_artwork(artist["id"], status="pending")

        response = client.get(
            "/api/artworks",
            params={"status": "pending", "artist_id": artist["id"]},
            headers=artist["headers"],
        )

        assert [a["id"] for a in response.json()["data"]] == [pending_id]

    def test_admin_lists_pending(self, client, artist, admin, make_artwork):
        pending_id = make_artwork(artist["id"], status="pending")

        response = client.get("/api/artworks", params={"status": "pending"}, headers=admin["headers"])

        assert [a["id"] for a in response.json()["data"]] == [pending_id]

    def test_search_is_case_insensitive(self, client, artist, make_artwork):
        match_id = make_artwork(artist["id"], title="Blue Harbour")
        make_artwork(artist["id"], title="Red Barn")

        response = client.get("/api/artworks", params={"search": "harbour"})

        assert [a["id"] for a in response.json()["data"]] == [match_id]

    def test_price_filter_and_sort(self, client, artist, make_artwork):
        cheap = make_artwork(artist["id"], price="10.00")
        mid = make_artwork(artist["id"], price="50.00")
        make_artwork(artist["id"], price="500.00")

        response = client.get("/api/artworks", params={"max_price": 100, "sort": "price-high"})

        assert [a["id"] for a in response.json()["data"]] == [mid, cheap]

    def test_pagination(self, client, artist, make_artwork):
        for i in range(5):
            make_artwork(artist["id"], title=f"Piece {i}")

        response = client.get("/api/artworks", params={"page": 2, "limit": 2, "sort": "title-asc"})

        body = response.json()
        assert [a["title"] for a in body["data"]] == ["Piece 2", "Piece 3"]
        assert body["pagination"]["pages"] == 3

    def test_every_listed_sort_accepted(self, client):
        for sort in ARTWORK_SORTS:
            response = client.get("/api/artworks", params={"sort": sort})

            assert response.status_code == 200, sort

    def test_unknown_sort_rejected(self, client):
        response = client.get("/api/artworks", params={"sort": "random"})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_limit_out_of_range(self, client):
        response = client.get("/api/artworks", params={"limit": 500})

        assert response.status_code == 400


class TestGetArtwork:
    def test_malformed_id(self, client):
        response = client.get("/api/artworks/not-an-id")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid artwork ID"

    def test_missing_artwork(self, client):
        response = client.get("/api/artworks/00000000-0000-4000-8000-000000000000")

        assert response.status_code == 404
        assert response.json()["error"] == "Artwork not found"

    def test_pending_hidden_from_public(self, client, artist, make_artwork):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.get(f"/api/artworks/{artwork_id}")

        assert response.status_code == 403

    def test_owner_sees_pending(self, client, artist, make_artwork):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.get(f"/api/artworks/{artwork_id}", headers=artist["headers"])

        assert response.status_code == 200

    def test_view_counter_increments(self, client, artist, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"])

        client.get(f"/api/artworks/{artwork_id}")
        client.get(f"/api/artworks/{artwork_id}")

        db_session.expire_all()
        assert db_session.get(Artwork, artwork_id).views == 2


class TestUpdateAndDelete:
    def test_update_resets_to_pending_and_deletes_replaced_images(self, client, artist, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"], status="approved")
        new_image = {"url": "https://cdn.artverse.io/b.jpg", "public_id": "b.jpg"}

        with patch("artverse.services.artwork_service.storage_service.delete_images") as delete_images:
            response = client.put(
                f"/api/artworks/{artwork_id}",
                json={"title": "Renamed", "images": [new_image]},
                headers=artist["headers"],
            )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Renamed"
        assert data["status"] == "pending"
        delete_images.assert_called_once_with([f"{artist['id']}/a.jpg"])

    def test_other_artist_cannot_update(self, client, artist, make_artwork):
        from conftest import register
        other = register(client, "artist")
        artwork_id = make_artwork(artist["id"])

        response = client.put(f"/api/artworks/{artwork_id}", json={"title": "Mine"}, headers=other["headers"])

        assert response.status_code == 403

    def test_owner_deletes_artwork_and_images(self, client, artist, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"])

        with patch("artverse.services.artwork_service.storage_service.delete_images") as delete_images:
            response = client.delete(f"/api/artworks/{artwork_id}", headers=artist["headers"])

        assert response.status_code == 200
        delete_images.assert_called_once()
        db_session.expire_all()
        assert db_session.query(Artwork).filter_by(id=artwork_id).first() is None

    def test_buyer_cannot_delete(self, client, artist, buyer, make_artwork):
        artwork_id = make_artwork(artist["id"])

        response = client.delete(f"/api/artworks/{artwork_id}", headers=buyer["headers"])

        assert response.status_code == 403


class TestModeration:
    def test_approve_notifies_artist(self, client, artist, admin, make_artwork, db_session):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.patch(f"/api/artworks/{artwork_id}/approve", headers=admin["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "approved"
        assert data["approved_at"] is not None
        types = [n.type for n in db_session.query(Notification).filter_by(user_id=artist["id"])]
        assert types == ["artwork_approved"]

    def test_reject_with_reason(self, client, artist, admin, make_artwork):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.patch(
            f"/api/artworks/{artwork_id}/reject",
            json={"reason": "low_quality"},
            headers=admin["headers"],
        )

        data = response.json()["data"]
        assert data["status"] == "rejected"
        assert data["rejection_reason"] == "low_quality"

    def test_reject_with_unknown_reason(self, client, artist, admin, make_artwork):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.patch(
            f"/api/artworks/{artwork_id}/reject",
            json={"reason": "too_blue"},
            headers=admin["headers"],
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid rejection reason"

    def test_reject_malformed_id(self, client, admin):
        response = client.patch("/api/artworks/not-an-id/reject", json={}, headers=admin["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid artwork ID"

    def test_reject_unknown_artwork(self, client, admin):
        response = client.patch(
            "/api/artworks/00000000-0000-4000-8000-000000000000/reject", json={}, headers=admin["headers"]
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Artwork not found"

    def test_artist_cannot_approve(self, client, artist, make_artwork):
        artwork_id = make_artwork(artist["id"], status="pending")

        response = client.patch(f"/api/artworks/{artwork_id}/approve", headers=artist["headers"])

        assert response.status_code == 403
