"""Integration tests for the home page and error pages."""


class TestHomePage:
    """Tests for GET /."""

    def test_guest_home_page(self, client, test_user, make_post):
        make_post(test_user, title="Hello")

        response = client.get("/")

        assert response.status_code == 200
        assert "Hello" in response.text
        assert "/reaction/" not in response.text

    def test_category_filter(self, client, test_user, make_post):
        make_post(test_user, title="Mixed topics", categories=["Science", "Other"])

        assert "Mixed topics" in client.get("/?category=Other").text
        assert "Mixed topics" not in client.get("/?category=Gaming").text

    def test_guest_mine_filter_redirects_to_login(self, client):
        response = client.get("/?filter=mine", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_mine_filter(self, authenticated_client, test_user, other_user, make_post):
        make_post(test_user, title="My own post")
        make_post(other_user, title="Somebody else")

        text = authenticated_client.get("/?filter=mine").text

        assert "My own post" in text
        assert "Somebody else" not in text

    def test_unknown_filter(self, client):
        response = client.get("/?filter=popular")
        assert response.status_code == 400


class TestErrorPages:
    """Unknown routes and methods render the error page."""

    def test_unknown_route(self, client):
        response = client.get("/no/such/page")

        assert response.status_code == 404
        assert "Page not found" in response.text

    def test_wrong_method(self, client):
        response = client.put("/")

        assert response.status_code == 405
        assert "Method not allowed" in response.text

    def test_static_asset(self, client):
        response = client.get("/statics/style.css")
        assert response.status_code == 200

    def test_static_directory_is_not_listed(self, client):
        assert client.get("/statics/").status_code == 404
