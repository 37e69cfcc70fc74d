import os
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from task_portal.database import Base, get_db  # noqa: E402
from task_portal.services.credentials import CredentialStore  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def engine():
    """In-memory database, fresh for every test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Session with the default admin already seeded"""
    session = session_factory()
    CredentialStore(session).ensure_default_admin()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client(db_session, session_factory) -> Generator[Callable[[], TestClient], None, None]:
    """Factory for API clients; each one keeps its own session cookie"""
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield lambda: TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture
def admin_client(make_client) -> TestClient:
    admin = make_client()
    res = admin.post("/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return admin


@pytest.fixture
def employee_client(make_client) -> Callable[[str, str], TestClient]:
    """Sign up an employee and return a client logged in as them"""
    def _employee_client(username: str, password: str = "password123") -> TestClient:
        employee = make_client()
        res = employee.post("/signup", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        res = employee.post("/login", json={"username": username, "password": password})
        assert res.status_code == 200, res.text
        return employee

    return _employee_client
