"""Integration tests for POST /reaction/."""

from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.models.post import Post
from app.modules.posts.reactions.models.reaction import Reaction


def _react(client, csrf_token, target_id, reaction_type, target="post", redirect="home"):
    return client.post(
        "/reaction/",
        data={
            "target": target,
            "id": str(target_id),
            "type": reaction_type,
            "redirect": redirect,
            "csrf_token": csrf_token,
        },
        follow_redirects=False,
    )


class TestReactionScenario:
    """Two users, one post, a dislike toggled on and off."""

    def test_dislike_then_retract(self, client, db_session, test_user, other_user, login_as):
        csrf_a = login_as(test_user)
        response = client.post(
            "/create/post",
            data={"title": "Hello", "content": "First post", "categories": ["Technology"], "csrf_token": csrf_a},
            follow_redirects=False,
        )
        assert response.status_code == 303
        post = db_session.query(Post).one()

        csrf_b = login_as(other_user)
        response = _react(client, csrf_b, post.id, "dislike")
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        page = client.get("/").text
        assert "Likes 0" in page
        assert "Dislikes 1" in page

        _react(client, csrf_b, post.id, "dislike")

        page = client.get("/").text
        assert "Likes 0" in page
        assert "Dislikes 0" in page
        assert db_session.query(Reaction).count() == 0


class TestReactionEndpoint:
    """Tests for the reaction form handler."""

    def test_requires_authentication(self, client, test_user, make_post):
        post = make_post(test_user)

        response = _react(client, "", post.id, "like")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_csrf_token_checked(self, authenticated_client, db_session, test_user, make_post):
        post = make_post(test_user)

        response = _react(authenticated_client, "bogus", post.id, "like")

        assert response.status_code == 403
        assert db_session.query(Reaction).count() == 0

    def test_redirects_to_post_page(self, authenticated_client, test_user, make_post):
        post = make_post(test_user)

        response = _react(authenticated_client, authenticated_client.csrf_token, post.id, "like", redirect="")

        assert response.headers["location"] == f"/posts/{post.id}"

    def test_comment_reaction_redirects_to_post(self, authenticated_client, db_session, test_user, make_post):
        post = make_post(test_user)
        authenticated_client.post(
            f"/posts/{post.id}",
            data={"content": "Nice", "csrf_token": authenticated_client.csrf_token},
        )
        comment_id = db_session.query(Comment.id).scalar()

        response = _react(authenticated_client, authenticated_client.csrf_token, comment_id, "like", target="comment")

        assert response.status_code == 303
        assert response.headers["location"] == f"/posts/{post.id}"
        assert "Likes 1" in authenticated_client.get(f"/posts/{post.id}").text

    def test_unknown_reaction_type(self, authenticated_client, test_user, make_post):
        post = make_post(test_user)

        response = _react(authenticated_client, authenticated_client.csrf_token, post.id, "love")

        assert response.status_code == 400

    def test_missing_target(self, authenticated_client):
        response = _react(authenticated_client, authenticated_client.csrf_token, 999, "like")
        assert response.status_code == 404

    def test_non_numeric_target(self, authenticated_client):
        response = _react(authenticated_client, authenticated_client.csrf_token, "abc", "like")
        assert response.status_code == 404

    def test_target_id_beyond_integer_range(self, authenticated_client, db_session):
        response = _react(
            authenticated_client, authenticated_client.csrf_token, "99999999999999999999999", "like"
        )

        assert response.status_code == 404
        assert db_session.query(Reaction).count() == 0
