"""Tests for User CRUD endpoints."""
from werkzeug.security import check_password_hash

from app.models.user import User
from tests.conftest import create_test_user


class TestUserCRUD:
    """User create / get / update / list."""

    def test_create_user(self, client):
        data = create_test_user(client, username="director", role="group_director")
        assert data["username"] == "director"
        assert data["role"] == "group_director"
        assert "user_id" in data
        assert "password" not in data
        assert "password_hash" not in data

    def test_password_is_hashed(self, client, db):
        user = create_test_user(client, username="alice")
        stored = db.query(User).filter(User.user_id == user["user_id"]).one()
        assert stored.password_hash != "admin123"
        assert check_password_hash(stored.password_hash, "admin123")

    def test_default_role_is_user(self, client):
        resp = client.post("/api/users/", json={
            "username": "plain",
            "email": "plain@example.org",
            "password": "secret99",
            "first_name": "Plain",
            "last_name": "User",
        })
        assert resp.status_code == 201
        assert resp.json()["role"] == "user"

    def test_duplicate_username_rejected(self, client):
        create_test_user(client, username="alice")
        resp = client.post("/api/users/", json={
            "username": "alice",
            "email": "other@example.org",
            "password": "secret99",
            "first_name": "Alice",
            "last_name": "Again",
        })
        assert resp.status_code == 400

    def test_duplicate_email_rejected(self, client):
        create_test_user(client, username="alice")
        resp = client.post("/api/users/", json={
            "username": "alice2",
            "email": "alice@example.org",
            "password": "secret99",
            "first_name": "Alice",
            "last_name": "Again",
        })
        assert resp.status_code == 400

    def test_unknown_role_rejected(self, client):
        resp = client.post("/api/users/", json={
            "username": "root",
            "email": "root@example.org",
            "password": "secret99",
            "first_name": "Root",
            "last_name": "User",
            "role": "admin",
        })
        assert resp.status_code == 422

    def test_get_user(self, client):
        user = create_test_user(client)
        resp = client.get(f"/api/users/{user['user_id']}")
        assert resp.status_code == 200
        assert resp.json()["username"] == "user"

    def test_get_user_not_found(self, client):
        resp = client.get("/api/users/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404

    def test_update_user_keeps_role(self, client):
        user = create_test_user(client, username="sec", role="secretary")
        resp = client.patch(f"/api/users/{user['user_id']}", json={
            "department": "Administration",
            "role": "group_director",
        })
        assert resp.status_code == 200
        assert resp.json()["department"] == "Administration"
        assert resp.json()["role"] == "secretary"

    def test_list_users(self, client):
        create_test_user(client, username="alice")
        create_test_user(client, username="bob")
        resp = client.get("/api/users/")
        assert resp.status_code == 200
        names = [u["username"] for u in resp.json()]
        assert names == ["alice", "bob"]


class TestLogin:
    """Credential check against the stored password hash."""

    def test_login_success(self, client):
        user = create_test_user(client, username="alice", role="secretary")
        resp = client.post("/api/users/login", json={"username": "alice", "password": "admin123"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["user_id"] == user["user_id"]
        assert data["role"] == "secretary"
        assert "password_hash" not in data

    def test_wrong_password(self, client):
        create_test_user(client, username="alice")
        resp = client.post("/api/users/login", json={"username": "alice", "password": "wrong-one"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid username or password"

    def test_unknown_username(self, client):
        resp = client.post("/api/users/login", json={"username": "nobody", "password": "admin123"})
        assert resp.status_code == 401

    def test_missing_password_field(self, client):
        resp = client.post("/api/users/login", json={"username": "alice"})
        assert resp.status_code == 422
