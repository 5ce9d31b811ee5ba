"""Integration tests for admin creation, login and token-guarded routes."""

from datetime import timedelta

import pytest

from keygate.models import Admin
from keygate.utils.tokens import TokenManager
from tests.conftest import make_settings

CREDS = {"email": "admin@example.com", "password": "s3cret-pass"}


class TestCreateAdmin:
    def test_create(self, client, db_session):
        resp = client.post("/api/admin/create", json=CREDS)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Admin berhasil dibuat"}

        admin = db_session.query(Admin).one()
        assert admin.email == CREDS["email"]
        assert admin.password != CREDS["password"]

    def test_duplicate_email(self, client, db_session):
        assert client.post("/api/admin/create", json=CREDS).status_code == 200

        resp = client.post("/api/admin/create", json={**CREDS, "password": "other"})
        assert resp.status_code == 409
        assert resp.json() == {"error": "Email admin sudah ada"}
        assert db_session.query(Admin).count() == 1

    @pytest.mark.parametrize(
        "body",
        [{"email": "a@b.c"}, {"password": "pw"}, {"email": "", "password": "pw"}, {}],
    )
    def test_missing_fields(self, body, client):
        resp = client.post("/api/admin/create", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "email dan password tidak boleh kosong"}


class TestLogin:
    def test_login_returns_working_token(self, client):
        client.post("/api/admin/create", json=CREDS)

        resp = client.post("/api/admin/login", json=CREDS)
        assert resp.status_code == 200
        token = resp.json()["token"]

        users = client.get(
            "/api/admin/users", headers={"Authorization": f"Bearer {token}"}
        )
        assert users.status_code == 200

    def test_wrong_password_and_unknown_email_identical(self, client):
        client.post("/api/admin/create", json=CREDS)

        wrong = client.post("/api/admin/login", json={**CREDS, "password": "nope"})
        unknown = client.post(
            "/api/admin/login", json={**CREDS, "email": "ghost@example.com"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json() == {"error": "Email atau password salah"}

    def test_missing_credentials(self, client):
        resp = client.post("/api/admin/login", json={})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Email atau password salah"}


class TestAuthorization:
    @pytest.mark.parametrize(
        "header",
        [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "token-without-scheme"],
    )
    def test_missing_or_malformed_header(self, header, client):
        headers = {} if header is None else {"Authorization": header}
        resp = client.get("/api/admin/users", headers=headers)
        assert resp.status_code == 401
        assert resp.json() == {"error": "Token tidak ada"}

    def test_invalid_token(self, client):
        resp = client.get(
            "/api/admin/users", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 403
        assert resp.json() == {"error": "Token tidak valid"}

    def test_expired_token(self, client, settings):
        token = TokenManager(settings).create_token(1, expires_in=timedelta(seconds=-1))
        resp = client.get(
            "/api/admin/users", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 403
        assert resp.json() == {"error": "Token tidak valid"}

    def test_token_signed_with_other_secret(self, client):
        other = make_settings(jwt_secret="someone-elses-secret-0123456789abcdef")
        token = TokenManager(other).create_token(1)
        resp = client.get(
            "/api/admin/apikey", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 403

    def test_handler_does_not_run_on_bad_token(self, client, monkeypatch):
        from keygate.utils.users import UserManager

        def fail(self):
            raise AssertionError("handler ran")

        monkeypatch.setattr(UserManager, "list_users", fail)
        resp = client.get(
            "/api/admin/users", headers={"Authorization": "Bearer bad"}
        )
        assert resp.status_code == 403


class TestListUsers:
    def test_lists_all_users(self, client, auth_headers):
        key_id = client.get("/generate-apikey").json()["id"]
        for name in ("Ani", "Budi"):
            client.post(
                "/api/register",
                json={
                    "firstname": name,
                    "lastname": "X",
                    "email": f"{name.lower()}@example.com",
                    "apikey_id": key_id,
                },
            )

        resp = client.get("/api/admin/users", headers=auth_headers)
        assert resp.status_code == 200
        users = resp.json()
        assert [u["firstname"] for u in users] == ["Ani", "Budi"]
        assert users[0]["apikey"] == key_id
        assert users[0]["last_date"] is None

    def test_empty(self, client, auth_headers):
        resp = client.get("/api/admin/users", headers=auth_headers)
        assert resp.json() == []


class TestEndToEnd:
    def test_generate_register_list(self, client, auth_headers):
        generated = client.get("/generate-apikey").json()

        reg = client.post(
            "/api/register",
            json={
                "firstname": "Lila",
                "lastname": "Sari",
                "email": "lila@example.com",
                "apikey_id": generated["id"],
            },
        )
        assert reg.json() == {"message": "User berhasil dibuat"}

        keys = client.get("/api/admin/apikey", headers=auth_headers).json()
        assert keys[0]["id"] == generated["id"]
        assert keys[0]["api_key"] == generated["apiKey"]
        assert keys[0]["status"] == "active"
