import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import models  # noqa: F401
from database import Base, build_engine, get_db
from main import app
from models import RoleEnum
from security import create_access_token, decode_access_token
from user_directory import UserDirectory


def auth_header(token):
    return {"Authorization": token}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register through the API; returns (user_id, token)."""

    def _register(username, email=None, password="secret123"):
        email = email or f"{username}@example.com"
        response = client.post("/user/register", json={"username": username, "email": email, "password": password})
        assert response.status_code == 201, response.text
        token = response.json()["token"]
        return decode_access_token(token).user_id, token

    return _register


@pytest.fixture
def admin_token(session_factory):
    session = session_factory()
    try:
        admin = UserDirectory(session).create_user("admin", "admin@example.com", "adminpass", role=RoleEnum.admin)
        return create_access_token(admin.id, admin.role)
    finally:
        session.close()


@pytest.fixture
def create_post(client):
    def _create_post(token, title="Hello", content="First post", category=None):
        body = {"title": title, "content": content}
        if category:
            body["category"] = category
        response = client.post("/post", json=body, headers=auth_header(token))
        assert response.status_code == 201, response.text
        return response.json()["post"]

    return _create_post
