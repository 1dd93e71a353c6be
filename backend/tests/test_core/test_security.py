"""
Tests for identifiers, password hashing, tokens and settings parsing
"""
import pytest
from fastapi import HTTPException

from artverse.core.auth import create_access_token, decode_access_token, hash_password, verify_password
from artverse.core.config import Settings
from artverse.core.errors import BadRequestError
from artverse.core.ids import ensure_valid_id, new_id, normalize_id
from artverse.models import User


class TestIds:
    def test_new_ids_are_valid_and_unique(self):
        first, second = new_id(), new_id()

        assert normalize_id(first) == first
        assert first != second

    @pytest.mark.parametrize("value", ["", "abc", None, 42, "1234"])
    def test_invalid_ids(self, value):
        assert normalize_id(value) is None

    def test_ensure_valid_id_names_the_label(self):
        with pytest.raises(BadRequestError) as exc:
            ensure_valid_id("nope", "course")

        assert exc.value.message == "Invalid course ID"

    def test_ensure_valid_id_normalizes_case(self):
        value = "6F9619FF-8B86-4011-B42D-00C04FC964FF"

        assert ensure_valid_id(value) == value.lower()


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_does_not_raise(self):
        assert verify_password("secret123", "not-a-hash") is False


class TestTokens:
    def test_round_trip_claims(self):
        user = User(id=new_id(), email="t@artverse.io", role="artist")

        claims = decode_access_token(create_access_token(user))

        assert claims["sub"] == user.id
        assert claims["role"] == "artist"
        assert claims["email"] == "t@artverse.io"

    def test_tampered_token(self):
        user = User(id=new_id(), email="t@artverse.io", role="buyer")
        token = create_access_token(user)

        with pytest.raises(HTTPException) as exc:
            decode_access_token(token[:-2] + "xx")

        assert exc.value.status_code == 401


class TestAllowedOrigins:
    def test_comma_separated(self):
        settings = Settings(ALLOWED_ORIGINS="https://a.io, https://b.io")

        assert settings.get_allowed_origins() == ["https://a.io", "https://b.io"]

    def test_json_array(self):
        settings = Settings(ALLOWED_ORIGINS='["https://a.io"]')

        assert settings.get_allowed_origins() == ["https://a.io"]

    def test_empty_falls_back_to_local_frontend(self):
        settings = Settings(ALLOWED_ORIGINS="")

        assert settings.get_allowed_origins() == ["http://localhost:5173"]
