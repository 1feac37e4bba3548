"""Tests for authentication endpoints.

Tests sign-up and sign-in, including error mapping and what is (not)
returned to the client.
"""

from datetime import timedelta

import jwt as pyjwt
import pytest

from driver_auth.auth import AuthService, TokenIssuer
from driver_auth.exceptions import DatabaseError
from driver_auth.main import create_app


class BrokenRegistry:
    def save_user(self, email, password_hash):
        raise DatabaseError("SQLITE_IOERR: /var/data/driver_auth.db")

    def get_user_by_email(self, email):
        raise DatabaseError("SQLITE_IOERR: /var/data/driver_auth.db")


@pytest.fixture
def broken_client(test_settings, hasher, jwt_secret):
    """Client whose auth service sits on failing storage."""
    service = AuthService(
        user_saver=BrokenRegistry(),
        user_provider=BrokenRegistry(),
        token_issuer=TokenIssuer(jwt_secret),
        token_ttl=timedelta(hours=1),
        hasher=hasher,
    )
    app = create_app(test_settings, auth_service=service)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


# ============================================================================
# POST /signup
# ============================================================================


class TestSignUp:
    """Tests for POST /signup."""

    def test_signup_success(self, client):
        response = client.post("/signup", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 201
        assert response.get_json() == {"id": 1}

    def test_signup_response_has_no_password_or_hash(self, client):
        response = client.post("/signup", json={"email": "a@x.com", "password": "pw1"})

        body = response.get_data(as_text=True)
        assert "pw1" not in body
        assert "$2b$" not in body

    def test_signup_duplicate_email(self, client, registered_user):
        response = client.post("/signup", json={"email": "a@x.com", "password": "pw2"})

        assert response.status_code == 409
        assert response.get_json() == {
            "error": {"type": "UserExists", "message": "user already exists"}
        }

    def test_signup_storage_failure(self, broken_client):
        response = broken_client.post("/signup", json={"email": "a@x.com", "password": "pw1"})

        assert response.status_code == 500
        assert response.get_json() == {
            "error": {"type": "InternalError", "message": "failed to save user"}
        }
        # Storage details never reach the client
        assert "SQLITE" not in response.get_data(as_text=True)

    def test_signup_trims_email(self, client):
        client.post("/signup", json={"email": "  a@x.com ", "password": "pw1"})

        response = client.post("/signup", json={"email": "a@x.com", "password": "pw2"})
        assert response.status_code == 409


# ============================================================================
# POST /signin
# ============================================================================


class TestSignIn:
    """Tests for POST /signin."""

    def test_signin_success(self, client, registered_user, jwt_secret):
        user_id, email, password = registered_user

        response = client.post("/signin", json={"email": email, "password": password, "appId": 5})

        assert response.status_code == 200
        token = response.get_json()["token"]
        payload = pyjwt.decode(token, jwt_secret, algorithms=["HS256"])
        assert int(payload["sub"]) == user_id == 1
        assert payload["app_id"] == 5
        assert payload["exp"] - payload["iat"] == 3600

    def test_signin_accepts_app_id_field_name(self, client, registered_user):
        _, email, password = registered_user
        response = client.post("/signin", json={"email": email, "password": password, "app_id": 5})
        assert response.status_code == 200

    def test_signin_wrong_password(self, client, registered_user):
        _, email, _ = registered_user

        response = client.post("/signin", json={"email": email, "password": "wrong", "appId": 5})

        assert response.status_code == 401
        assert response.get_json() == {
            "error": {"type": "InvalidCredentials", "message": "invalid email or password"}
        }

    def test_signin_unknown_email_same_as_wrong_password(self, client, registered_user):
        _, email, _ = registered_user

        wrong_password = client.post("/signin", json={"email": email, "password": "wrong", "appId": 5})
        unknown_email = client.post(
            "/signin", json={"email": "nobody@x.com", "password": "wrong", "appId": 5}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.get_json() == unknown_email.get_json()

    def test_signin_storage_failure(self, broken_client):
        response = broken_client.post(
            "/signin", json={"email": "a@x.com", "password": "pw1", "appId": 5}
        )

        assert response.status_code == 500
        assert response.get_json() == {
            "error": {"type": "InternalError", "message": "failed to login"}
        }

    def test_signin_missing_app_id(self, client, registered_user):
        _, email, password = registered_user

        response = client.post("/signin", json={"email": email, "password": password})

        assert response.status_code == 400
        fields = [e["field"] for e in response.get_json()["error"]["details"]["errors"]]
        assert fields == ["appId"]

    @pytest.mark.parametrize("app_id", ["5", 5.5, None, "five"])
    def test_signin_non_integer_app_id(self, client, registered_user, app_id):
        _, email, password = registered_user

        response = client.post("/signin", json={"email": email, "password": password, "appId": app_id})

        assert response.status_code == 400
        assert response.get_json()["error"]["type"] == "ValidationError"


# ============================================================================
# Full flow
# ============================================================================


class TestAuthFlow:
    def test_register_duplicate_login_wrong_password(self, client, jwt_secret):
        first = client.post("/signup", json={"email": "a@x.com", "password": "pw1"})
        assert first.status_code == 201
        assert first.get_json()["id"] == 1

        second = client.post("/signup", json={"email": "a@x.com", "password": "pw2"})
        assert second.status_code == 409

        login = client.post("/signin", json={"email": "a@x.com", "password": "pw1", "appId": 5})
        assert login.status_code == 200
        payload = pyjwt.decode(login.get_json()["token"], jwt_secret, algorithms=["HS256"])
        assert payload["sub"] == "1"
        assert payload["app_id"] == 5

        # The second password was never stored
        stale = client.post("/signin", json={"email": "a@x.com", "password": "pw2", "appId": 5})
        assert stale.status_code == 401

        wrong = client.post("/signin", json={"email": "a@x.com", "password": "wrong", "appId": 5})
        assert wrong.status_code == 401
