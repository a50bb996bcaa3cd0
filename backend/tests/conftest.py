import pytest
from fastapi.testclient import TestClient

from bookkeeping.db.session import Database
from bookkeeping.main import create_app
from bookkeeping.services.bank_accounts import BankAccountService
from bookkeeping.services.categories import CategoryService
from bookkeeping.services.users import UserService

PASSWORD = "Secret123!"


@pytest.fixture
def database():
    """Fresh in-memory SQLite database with the schema created."""
    db = Database("sqlite://")
    db.connect()
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def client(database):
    app = create_app(database=database, delete_policy="restrict")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def cascade_client(database):
    app = create_app(database=database, delete_policy="cascade")
    with TestClient(app) as c:
        yield c


def make_user(session, email="alice@example.com", name="Alice Doe", password=PASSWORD):
    return UserService(session).create(name, email, password)


def make_category(session, name="Groceries"):
    return CategoryService(session).create({"name": name, "color": "#FF5733", "description": "Food and drinks"})


def make_account(session, user_id, name="Main account"):
    return BankAccountService(session).create(
        user_id,
        {
            "name": name,
            "api_token": "tok-123",
            "account_status": "active",
            "connection_status": "connected",
        },
    )


def auth_headers(client, email="alice@example.com", password=PASSWORD):
    res = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}
