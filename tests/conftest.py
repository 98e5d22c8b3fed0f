import os
import tempfile
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_boilerplate.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["ENVIRONMENT"] = "test"
for _smtp_var in ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SMTP_FROM_EMAIL"):
    os.environ[_smtp_var] = ""

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from boilerplate.main import app
from boilerplate.domain.role import Role
from boilerplate.services.user import UserService

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class FakeMailService:
    """Records outgoing mail instead of talking to an SMTP server."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: list[dict] = []

    async def send_mail_async(self, subject, body, to, from_address=None, as_html=True):
        return self.send_mail(subject, body, to, from_address, as_html)

    def send_mail(self, subject, body, to, from_address=None, as_html=True):
        self.sent.append(
            {"subject": subject, "body": body, "to": to, "from": from_address, "html": as_html}
        )
        return self.succeed


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def service(db: Session) -> UserService:
    return UserService(db)


@pytest.fixture(scope="function")
def mailer() -> FakeMailService:
    return FakeMailService()


@pytest.fixture(scope="function")
def client(db_session, mailer):
    """Create a test client with database and mail dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from boilerplate.api.deps import get_db, get_mail_service

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mailer

    yield TestClient(app)

    app.dependency_overrides.clear()


def _create_user(service: UserService, name: str, email: str, password: str, role: Role) -> dict:
    user = service.add_user(name, email, password, role)
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "password": password,
        "role": user.role.value,
    }


@pytest.fixture(scope="function")
def admin_user(service: UserService) -> dict:
    return _create_user(service, "Administrator", "admin@example.com", "AdminPass123", Role.admin)


@pytest.fixture(scope="function")
def manager_user(service: UserService) -> dict:
    return _create_user(service, "Manager", "manager@example.com", "ManagerPass123", Role.manager)


@pytest.fixture(scope="function")
def guest_user(service: UserService) -> dict:
    return _create_user(service, "Guest", "guest@example.com", "GuestPass123", Role.guest)


def _login(client: TestClient, user: dict):
    """Sign ``user`` in; the session cookie is kept by the client."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": user["email"], "password": user["password"]},
    )
    assert response.status_code == 200
    return response


@pytest.fixture(scope="function")
def login():
    return _login


@pytest.fixture(scope="function")
def admin_client(client, admin_user: dict) -> TestClient:
    _login(client, admin_user)
    return client


@pytest.fixture(scope="function")
def guest_client(client, guest_user: dict) -> TestClient:
    _login(client, guest_user)
    return client
