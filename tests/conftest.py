# tests/conftest.py

import os
import tempfile

# must be set before the app (and config) is imported
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="nomnom-uploads-"))
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import sessionmaker

import config
from main import app
from database import Base, build_engine, get_db
import models  # registers every table on Base.metadata

# --- Test database ---
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# every request uses the test database instead of get_db
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def test_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
async def ac():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Helpers ---

async def register_and_login(ac, username="alice", email="a@x.com", password="pw1") -> dict:
    """Registers a user, logs in and returns the Authorization header."""
    response = await ac.post("/register", json={"username": username, "email": email, "password": password})
    assert response.status_code == 201, response.text
    response = await ac.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def create_post(ac, headers, caption="Pasta") -> dict:
    files = {"image": ("dish.jpg", b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")}
    response = await ac.post("/posts", data={"caption": caption}, files=files, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth(ac):
    async def _auth(**kwargs):
        return await register_and_login(ac, **kwargs)
    return _auth


@pytest.fixture
def new_post(ac):
    async def _new_post(headers, caption="Pasta"):
        return await create_post(ac, headers, caption=caption)
    return _new_post


@pytest.fixture
async def ac_no_raise():
    """Client that receives the 500 response instead of the re-raised app exception."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def uploaded_files():
    """Callable returning the names currently stored under UPLOAD_DIR."""
    def _uploaded_files() -> set:
        if not config.UPLOAD_DIR.exists():
            return set()
        return {p.name for p in config.UPLOAD_DIR.iterdir()}
    return _uploaded_files
