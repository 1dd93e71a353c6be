"""
Pytest fixtures and configuration for ArtVerse Backend tests

This file provides shared fixtures that can be used across all test modules.
Tests run against an in-memory SQLite database recreated for every test.
"""
import os

# Settings are read at import time, so the test environment must be set first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["COOKIE_SECURE"] = "false"
os.environ["COOKIE_SAMESITE"] = "lax"
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = ""

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from artverse import models  # noqa: E402,F401
from artverse.core.auth import create_access_token, hash_password  # noqa: E402
from artverse.core.database import Base, SessionLocal, engine  # noqa: E402
from artverse.core.rate_limit import rate_limiter  # noqa: E402
from artverse.main import app  # noqa: E402
from artverse.models import Artwork, Course, Lesson, User  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_database():
    """
    Fresh schema for each test

    Scope: function
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def db_session():
    """
    Provides a SQLAlchemy session on the test database

    Automatically closed after the test
    """
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    return TestClient(app)


def register(client, role="buyer", email=None, name=None):
    """
    Register a user through the API and return its auth info

    Cookies set by the response are cleared so each request picks its
    identity explicitly through the Authorization header.
    """
    email = email or f"{role}-{os.urandom(4).hex()}@artverse.io"
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": PASSWORD, "name": name or f"Test {role.title()}", "role": role},
    )
    assert response.status_code == 201, response.text
    client.cookies.clear()
    data = response.json()["data"]
    return {
        "id": data["user"]["id"],
        "email": email,
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def buyer(client):
    return register(client, "buyer", name="Bea Buyer")


@pytest.fixture
def artist(client):
    return register(client, "artist", name="Ada Artist")


@pytest.fixture
def admin(db_session):
    """Admins cannot self-register, so the account is created directly"""
    user = User(
        email="admin@artverse.io",
        password_hash=hash_password(PASSWORD),
        role="admin",
        profile={"name": "Ann Admin"},
    )
    db_session.add(user)
    db_session.commit()
    token = create_access_token(user)
    return {
        "id": user.id,
        "email": user.email,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture
def sample_image():
    return {"url": "https://cdn.artverse.io/img/1.jpg", "public_id": "artist/1.jpg", "width": 800, "height": 600}


@pytest.fixture
def sample_artwork_data(sample_image):
    """
    Provides a valid artwork creation payload
    """
    return {
        "title": "Harbour at Dusk",
        "description": "Oil on canvas",
        "category": "Painting",
        "price": 250.0,
        "stock": 2,
        "images": [sample_image],
        "tags": "harbour, sunset",
    }


@pytest.fixture
def make_artwork(db_session):
    """Factory inserting an artwork row directly (status approved unless given)"""
    def _make(artist_id, status="approved", price="100.00", stock=1, title="Still Life"):
        artwork = Artwork(
            artist_id=artist_id,
            title=title,
            description="Test artwork",
            category="Painting",
            price=Decimal(price),
            stock=stock,
            images=[{"url": "https://cdn.artverse.io/a.jpg", "public_id": f"{artist_id}/a.jpg"}],
            tags=[],
            status=status,
        )
        db_session.add(artwork)
        db_session.commit()
        return artwork.id
    return _make


@pytest.fixture
def make_course(db_session):
    """Factory inserting a course row with one lesson (public unless told otherwise)"""
    def _make(artist_id, status="published", is_approved=True, price="49.00", title="Watercolour Basics"):
        course = Course(
            artist_id=artist_id,
            title=title,
            description="Test course",
            price=Decimal(price),
            thumbnail={"url": "https://cdn.artverse.io/c.jpg", "public_id": f"{artist_id}/c.jpg"},
            status=status,
            is_approved=is_approved,
        )
        course.lessons.append(Lesson(position=0, title="Intro", youtube_url="https://youtu.be/x", duration=5))
        db_session.add(course)
        db_session.commit()
        return course.id
    return _make
