import itertools
import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from agrimandi.auth.security import SESSION_TTL, get_password_hash
from agrimandi.auth.sessions import SessionStore
from agrimandi.db.init import init_db
from agrimandi.db.session import get_db, make_engine
from agrimandi.main import app
from agrimandi.models.user import User
from agrimandi.schemas.user import SessionUser

PASSWORD = "s3cret-pass"


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'agrimandi-test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert a user row directly and return its session identity."""
    counter = itertools.count()

    def _make(role, name=None):
        n = next(counter)
        user = User(
            email=f"{role}{n}@agrimandi.in",
            hashed_password=get_password_hash(PASSWORD),
            name=name or f"{role.title()} {n}",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return SessionUser.model_validate(user)

    return _make


@pytest.fixture
def client_factory(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.sessions = SessionStore(SESSION_TTL)
    clients = []

    def _make():
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_factory):
    return client_factory()


@pytest.fixture
def login_as(client_factory):
    """Register a fresh user through the API and return a client holding their session cookie."""
    counter = itertools.count()

    def _login(role, name=None):
        n = next(counter)
        email = f"api-{role}{n}@agrimandi.in"
        c = client_factory()
        resp = c.post("/auth/register", json={
            "email": email,
            "password": PASSWORD,
            "name": name or f"{role.title()} {n}",
            "role": role,
        })
        assert resp.status_code == 201, resp.text
        resp = c.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        c.user = resp.json()["user"]
        return c

    return _login
