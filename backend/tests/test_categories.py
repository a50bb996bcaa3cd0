import pytest

from bookkeeping.services.categories import CategoryService
from bookkeeping.services.errors import DependentRowsExist, NotFound
from bookkeeping.services.transactions import TransactionService

from conftest import make_account, make_category, make_user

MISSING_ID = "00000000-0000-4000-8000-000000000000"
CATEGORY = {"name": "Transport", "color": "#FF5733", "description": "Daily commute"}


def test_category_crud_over_http(client):
    res = client.post("/api/v1/categories", json=CATEGORY)
    assert res.status_code == 201
    created = res.json()
    for key, value in CATEGORY.items():
        assert created[key] == value

    got = client.get(f"/api/v1/categories/{created['id']}")
    assert got.status_code == 200
    assert got.json() == created

    patched = client.patch(f"/api/v1/categories/{created['id']}", json={"color": "blue"})
    assert patched.status_code == 200
    assert patched.json()["color"] == "blue"
    assert patched.json()["name"] == "Transport"
    assert patched.json()["description"] == "Daily commute"

    assert [c["id"] for c in client.get("/api/v1/categories").json()] == [created["id"]]

    assert client.delete(f"/api/v1/categories/{created['id']}").status_code == 204
    assert client.get(f"/api/v1/categories/{created['id']}").status_code == 404


def test_category_validation(client):
    assert client.post("/api/v1/categories", json={**CATEGORY, "name": "T"}).status_code == 422
    assert client.post("/api/v1/categories", json={**CATEGORY, "name": "x" * 51}).status_code == 422
    assert client.post("/api/v1/categories", json={"name": "Transport"}).status_code == 422


def test_category_id_must_be_uuid(client):
    assert client.get("/api/v1/categories/not-a-uuid").status_code == 422


@pytest.mark.parametrize("method", ["get", "patch", "delete"])
def test_missing_category_is_404(client, method):
    kwargs = {"json": {"name": "Anything"}} if method == "patch" else {}
    res = getattr(client, method)(f"/api/v1/categories/{MISSING_ID}", **kwargs)
    assert res.status_code == 404
    assert res.json()["detail"] == f"Category with ID {MISSING_ID} not found"


def test_names_are_not_unique(session):
    make_category(session, name="Food")
    make_category(session, name="Food")
    assert len(CategoryService(session).list()) == 2


def _category_in_use(session):
    user = make_user(session)
    account = make_account(session, user.id)
    category = make_category(session)
    TransactionService(session).create({
        "bank_account_id": account.id,
        "category_id": category.id,
        "type": "expense",
        "amount": "-12.50",
        "date": "2025-03-10T13:24:18Z",
    })
    return category


def test_category_in_use_cannot_be_removed(session):
    category = _category_in_use(session)
    with pytest.raises(DependentRowsExist):
        CategoryService(session, delete_policy="restrict").remove(category.id)
    assert CategoryService(session).get(category.id).name == "Groceries"


def test_category_in_use_cascades(session):
    category = _category_in_use(session)
    CategoryService(session, delete_policy="cascade").remove(category.id)
    with pytest.raises(NotFound):
        CategoryService(session).get(category.id)
    assert TransactionService(session).list() == []
