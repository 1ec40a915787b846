import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import models  # noqa: F401  registers every table
from app.db.base import Base
from app.db.session import get_db
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a user and return (token, user json)"""
    def _register(username, email=None, password="secret1"):
        response = client.post("/api/auth/register", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["user"]
    return _register


@pytest.fixture
def upload(client):
    """Upload a video as the token holder and return the video json"""
    def _upload(token, title="Test", description="A test video", **fields):
        response = client.post(
            "/api/videos",
            json={"title": title, "description": description, **fields},
            headers=auth_headers(token),
        )
        assert response.status_code == 201, response.text
        return response.json()["video"]
    return _upload
