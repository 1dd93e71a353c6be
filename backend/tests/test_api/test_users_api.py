"""
Tests for profile management and the public artist directory
"""
from conftest import register


class TestOwnProfile:
    def test_profile_includes_commission_stats(self, client, artist):
        response = client.get("/api/users/profile", headers=artist["headers"])

        data = response.json()["data"]
        assert data["email"] == artist["email"]
        assert data["commission_stats"] == {"total": 0, "completed": 0, "in_progress": 0}
        assert "password_hash" not in data

    def test_buyer_stats_have_no_in_progress(self, client, buyer):
        response = client.get("/api/users/profile", headers=buyer["headers"])

        assert response.json()["data"]["commission_stats"] == {"total": 0, "completed": 0}

    def test_artist_updates_artist_fields(self, client, artist):
        response = client.put(
            "/api/users/profile",
            json={"profile": {
                "bio": "Seascapes",
                "skills": ["oil", "gouache"],
                "commission_rates": [{"kind": "portrait", "price": 300}],
                "shipping_address": {"street": "x", "city": "y", "state": "z", "country": "c", "postal_code": "p"},
            }},
            headers=artist["headers"],
        )

        profile = response.json()["data"]["profile"]
        assert profile["name"] == "Ada Artist"
        assert profile["bio"] == "Seascapes"
        assert profile["skills"] == ["oil", "gouache"]
        assert profile["commission_rates"][0]["kind"] == "portrait"
        assert "shipping_address" not in profile

    def test_buyer_cannot_set_artist_fields(self, client, buyer):
        response = client.put(
            "/api/users/profile",
            json={"profile": {"skills": ["oil"], "name": "Bea B."}},
            headers=buyer["headers"],
        )

        profile = response.json()["data"]["profile"]
        assert profile["name"] == "Bea B."
        assert "skills" not in profile

    def test_profile_data_required(self, client, buyer):
        response = client.put("/api/users/profile", json={}, headers=buyer["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Profile data is required"

    def test_update_avatar(self, client, buyer):
        response = client.put(
            "/api/users/profile/picture", json={"avatar": "https://cdn.artverse.io/me.png"}, headers=buyer["headers"]
        )

        assert response.json()["data"] == {"avatar": "https://cdn.artverse.io/me.png"}

    def test_blank_avatar(self, client, buyer):
        response = client.put("/api/users/profile/picture", json={"avatar": " "}, headers=buyer["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Avatar URL is required"

    def test_deactivate_hides_account(self, client, artist):
        client.delete("/api/users/profile", headers=artist["headers"])

        assert client.get(f"/api/users/{artist['id']}").status_code == 404
        assert client.get("/api/users/artists").json()["count"] == 0


class TestPublicProfiles:
    def test_artist_directory(self, client, artist, buyer):
        register(client, "artist", name="Bo Sculptor")

        response = client.get("/api/users/artists")

        body = response.json()
        assert body["count"] == 2
        names = {entry["profile"]["name"] for entry in body["data"]}
        assert names == {"Ada Artist", "Bo Sculptor"}
        assert all(entry["profile"]["avatar"] for entry in body["data"])

    def test_artist_detail_has_portfolio_fields(self, client, artist):
        response = client.get(f"/api/users/artists/{artist['id']}")

        profile = response.json()["data"]["profile"]
        assert profile["skills"] == []
        assert profile["commission_rates"] == []

    def test_buyer_is_not_an_artist(self, client, buyer):
        response = client.get(f"/api/users/artists/{buyer['id']}")

        assert response.status_code == 404
        assert response.json()["error"] == "Artist not found"

    def test_public_profile_hides_email(self, client, buyer):
        response = client.get(f"/api/users/{buyer['id']}")

        data = response.json()["data"]
        assert data["profile"]["name"] == "Bea Buyer"
        assert "email" not in data

    def test_malformed_user_id(self, client):
        response = client.get("/api/users/nope")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid user ID"
