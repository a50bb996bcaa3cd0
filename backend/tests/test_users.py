import pytest

from bookkeeping.db import models
from bookkeeping.services.errors import DependentRowsExist, DuplicateEmail, NotFound, Unauthorized
from bookkeeping.services.security import verify_password
from bookkeeping.services.users import UserService

from conftest import PASSWORD, auth_headers, make_account, make_user

MISSING_ID = "00000000-0000-4000-8000-000000000000"


def test_create_then_get_returns_same_record(database):
    s1 = database.session()
    created = make_user(s1)
    created_view = {c: getattr(created, c) for c in ("id", "name", "email", "created_at", "updated_at")}
    s1.close()

    s2 = database.session()
    fetched = UserService(s2).get(created_view["id"])
    assert {c: getattr(fetched, c) for c in created_view} == created_view
    # stored as a hash, never as plaintext
    assert fetched.password != PASSWORD
    assert verify_password(PASSWORD, fetched.password)
    s2.close()


def test_duplicate_email_is_rejected_and_first_user_kept(session):
    first = make_user(session, name="First User")
    with pytest.raises(DuplicateEmail):
        make_user(session, name="Second User")
    kept = UserService(session).find_by_email("alice@example.com")
    assert kept.id == first.id
    assert kept.name == "First User"
    assert session.query(models.User).count() == 1


@pytest.mark.parametrize("call", [
    lambda svc: svc.get(MISSING_ID),
    lambda svc: svc.update(MISSING_ID, {"name": "Nobody"}),
    lambda svc: svc.update(MISSING_ID, {}),
    lambda svc: svc.remove(MISSING_ID),
])
def test_missing_user_is_not_found(session, call):
    with pytest.raises(NotFound):
        call(UserService(session))


def test_update_rehashes_password_and_keeps_other_fields(session):
    user = make_user(session)
    svc = UserService(session)
    updated = svc.update(user.id, {"password": "N3wPass!word"})
    assert updated.name == "Alice Doe"
    assert updated.email == "alice@example.com"
    assert verify_password("N3wPass!word", updated.password)
    assert not verify_password(PASSWORD, updated.password)


def test_update_to_taken_email_is_duplicate(session):
    make_user(session)
    bob = make_user(session, email="bob@example.com", name="Bob Smith")
    with pytest.raises(DuplicateEmail):
        UserService(session).update(bob.id, {"email": "alice@example.com"})
    assert UserService(session).get(bob.id).email == "bob@example.com"


def test_authenticate_failures_are_indistinguishable(session):
    make_user(session)
    svc = UserService(session)
    with pytest.raises(Unauthorized) as wrong_password:
        svc.authenticate("alice@example.com", "Wrong123!")
    with pytest.raises(Unauthorized) as unknown_email:
        svc.authenticate("nobody@example.com", PASSWORD)
    assert wrong_password.value.message == unknown_email.value.message
    assert svc.authenticate("alice@example.com", PASSWORD).email == "alice@example.com"


def test_reset_password(session):
    make_user(session)
    UserService(session).reset_password("alice@example.com", "Other123!")
    assert UserService(session).authenticate("alice@example.com", "Other123!")


def test_remove_user_with_accounts_is_restricted(session):
    user = make_user(session)
    make_account(session, user.id)
    with pytest.raises(DependentRowsExist):
        UserService(session, delete_policy="restrict").remove(user.id)
    assert UserService(session).get(user.id).id == user.id


def test_remove_user_cascades_when_configured(session):
    user = make_user(session)
    make_account(session, user.id)
    UserService(session, delete_policy="cascade").remove(user.id)
    assert session.query(models.User).count() == 0
    assert session.query(models.BankAccount).count() == 0


def test_unknown_delete_policy_is_rejected(session):
    with pytest.raises(ValueError):
        UserService(session, delete_policy="orphan")


# --- HTTP ---------------------------------------------------------------

def _register(client, email="alice@example.com", name="Alice Doe"):
    return client.post("/api/v1/users", json={"name": name, "email": email, "password": PASSWORD})


def test_api_password_never_serialized(client):
    res = _register(client)
    assert res.status_code == 201
    body = res.json()
    assert "password" not in body
    user_id = body["id"]

    assert "password" not in client.get(f"/api/v1/users/{user_id}").json()
    assert all("password" not in u for u in client.get("/api/v1/users").json())
    patched = client.patch(f"/api/v1/users/{user_id}", json={"name": "Alice Renamed"})
    assert patched.status_code == 200
    assert patched.json()["name"] == "Alice Renamed"
    assert "password" not in patched.json()


def test_api_duplicate_email(client):
    assert _register(client).status_code == 201
    res = _register(client, name="Someone Else")
    assert res.status_code == 422
    assert res.json()["detail"] == "Email is already in use"


def test_api_validation(client):
    res = client.post("/api/v1/users", json={"name": "Al", "email": "not-an-email", "password": "short"})
    assert res.status_code == 422


def test_api_weak_password_update_rejected(client):
    user_id = _register(client).json()["id"]
    res = client.patch(f"/api/v1/users/{user_id}", json={"password": "alllowercase"})
    assert res.status_code == 422


def test_api_explicit_null_is_rejected(client):
    user_id = _register(client).json()["id"]
    res = client.patch(f"/api/v1/users/{user_id}", json={"name": None})
    assert res.status_code == 422


def test_api_pagination(client):
    for i in range(3):
        assert _register(client, email=f"user{i}@example.com").status_code == 201
    assert len(client.get("/api/v1/users", params={"take": 2}).json()) == 2
    assert len(client.get("/api/v1/users", params={"skip": 2, "take": 2}).json()) == 1
    assert client.get("/api/v1/users", params={"take": 0}).status_code == 422


def test_api_delete_then_not_found(client):
    user_id = _register(client).json()["id"]
    assert client.delete(f"/api/v1/users/{user_id}").status_code == 204
    assert client.get(f"/api/v1/users/{user_id}").status_code == 404
    assert client.delete(f"/api/v1/users/{user_id}").status_code == 404


def test_api_login(client):
    _register(client)
    headers = auth_headers(client)
    assert headers["Authorization"].startswith("Bearer ")

    wrong_password = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "Nope123!"})
    unknown_email = client.post("/api/v1/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_reset_password_script(database):
    from reset_password import reset_password as run_reset

    s = database.session()
    make_user(s)
    s.close()
    assert run_reset(database, "alice@example.com", "Other123!") == 0
    assert run_reset(database, "ghost@example.com", "Other123!") == 1

    s = database.session()
    assert UserService(s).authenticate("alice@example.com", "Other123!")
    s.close()


def test_api_oversized_password_rejected(client):
    huge = "Aa1!" * 1500
    res = client.post("/api/v1/users", json={"name": "Alice Doe", "email": "alice@example.com", "password": huge})
    assert res.status_code == 422

    user_id = _register(client).json()["id"]
    assert client.patch(f"/api/v1/users/{user_id}", json={"password": huge}).status_code == 422
    res = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": huge})
    assert res.status_code == 422


def test_api_malformed_user_id_rejected(client):
    assert client.get("/api/v1/users/not-a-uuid").status_code == 422
    assert client.patch("/api/v1/users/not-a-uuid", json={"name": "Alice Doe"}).status_code == 422
    assert client.delete("/api/v1/users/not-a-uuid").status_code == 422
    assert client.get("/api/v1/transactions/user/not-a-uuid").status_code == 422


def test_api_unreadable_stored_hash_is_logged_server_error(client, session, caplog):
    assert _register(client).status_code == 201
    session.query(models.User).update({"password": "not-a-passlib-hash"})
    session.commit()
    session.close()

    with caplog.at_level("ERROR", logger="bookkeeping.main"):
        res = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert res.status_code == 500
    assert res.json() == {"detail": "Error validating credentials"}
    assert any("CredentialValidationError" in r.getMessage() for r in caplog.records if r.name == "bookkeeping.main")
