"""Integration tests for the login, registration and logout pages."""

from app.modules.auth.models.session import Session as SessionModel
from app.modules.user_management.models.user import User


class TestRegisterPage:
    """Tests for GET/POST /register."""

    def test_form_renders(self, client):
        response = client.get("/register")
        assert response.status_code == 200
        assert 'name="email"' in response.text

    def test_register_logs_in(self, client, db_session):
        response = client.post(
            "/register",
            data={"name": "carol", "email": "carol@example.com", "password": "Password1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("session=")
        assert "httponly" in cookie.lower()
        assert "samesite=strict" in cookie.lower()
        assert db_session.query(SessionModel).count() == 1

    def test_duplicate_name(self, client, db_session, test_user):
        """The form is re-rendered with the reason and no session is started."""
        response = client.post(
            "/register",
            data={"name": test_user.name, "email": "new@example.com", "password": "Password1"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert "Username already taken" in response.text
        assert "set-cookie" not in response.headers
        assert db_session.query(SessionModel).count() == 0
        assert db_session.query(User).count() == 1

    def test_invalid_password(self, client):
        response = client.post(
            "/register",
            data={"name": "carol", "email": "carol@example.com", "password": "password"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert "Invalid password" in response.text


class TestLoginPage:
    """Tests for GET/POST /login."""

    def test_form_renders(self, client):
        response = client.get("/login")
        assert response.status_code == 200
        assert 'name="username"' in response.text

    def test_login_sets_cookie(self, client, test_user):
        response = client.post(
            "/login",
            data={"username": test_user.name, "password": "Password123"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert client.cookies.get("session")

    def test_wrong_password(self, client, test_user):
        response = client.post(
            "/login",
            data={"username": test_user.name, "password": "Wrong1234"},
            follow_redirects=False,
        )

        assert response.status_code == 401
        assert "Invalid username or password" in response.text
        assert "set-cookie" not in response.headers

    def test_empty_fields(self, client):
        response = client.post("/login", data={"username": "", "password": ""})
        assert response.status_code == 400

    def test_logged_in_home_page(self, authenticated_client, test_user):
        response = authenticated_client.get("/")
        assert response.status_code == 200
        assert test_user.name in response.text
        assert "Logout" in response.text


class TestLogout:
    """Tests for GET /logout."""

    def test_logout_revokes_session(self, authenticated_client, db_session):
        response = authenticated_client.get("/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert "max-age=0" in response.headers["set-cookie"].lower()
        assert db_session.query(SessionModel).count() == 0

    def test_logout_as_guest(self, client):
        response = client.get("/logout", follow_redirects=False)
        assert response.status_code == 303


class TestStaleCookie:
    """A dead session cookie is treated as a guest and cleared."""

    def test_unknown_token_is_cleared(self, client):
        client.cookies.set("session", "f" * 64)

        response = client.get("/")

        assert response.status_code == 200
        assert "Login" in response.text
        assert "max-age=0" in response.headers["set-cookie"].lower()

    def test_unknown_token_on_protected_page(self, client):
        client.cookies.set("session", "f" * 64)

        response = client.get("/create/post", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
