"""Tests for the home feed query."""

from datetime import datetime, timedelta

import pytest

from app.core.exceptions import AuthError, ValidationError
from app.modules.home_feed.services.feed import list_posts, normalize_filter
from app.modules.posts.reactions.services.reaction import toggle_reaction


def _titles(posts):
    return [post.title for post in posts]


class TestListPosts:
    """Tests for list_posts."""

    def test_newest_first(self, db_session, test_user, make_post):
        older = make_post(test_user, title="Older")
        make_post(test_user, title="Newer")
        older.created_at = datetime.utcnow() - timedelta(hours=1)
        db_session.commit()

        assert _titles(list_posts(db_session)) == ["Newer", "Older"]

    def test_category_filter(self, db_session, test_user, make_post):
        make_post(test_user, title="Mixed", categories=["Science", "Other"])
        make_post(test_user, title="Games", categories=["Gaming"])

        assert _titles(list_posts(db_session, categories=["Other"])) == ["Mixed"]
        assert _titles(list_posts(db_session, categories=["Gaming"])) == ["Games"]
        assert list_posts(db_session, categories=["Art"]) == []

    def test_category_filter_matches_any(self, db_session, test_user, make_post):
        make_post(test_user, title="Mixed", categories=["Science", "Other"])
        make_post(test_user, title="Games", categories=["Gaming"])

        posts = list_posts(db_session, categories=["Gaming", "Science"])

        assert sorted(_titles(posts)) == ["Games", "Mixed"]

    def test_mine_filter(self, db_session, test_user, other_user, make_post):
        make_post(test_user, title="Mine")
        make_post(other_user, title="Theirs")

        assert _titles(list_posts(db_session, "mine", viewer_id=test_user.id)) == ["Mine"]

    def test_liked_filter(self, db_session, test_user, other_user, make_post):
        liked = make_post(other_user, title="Liked")
        disliked = make_post(other_user, title="Disliked")
        make_post(other_user, title="Ignored")
        toggle_reaction(db_session, test_user.id, "post", liked.id, "like")
        toggle_reaction(db_session, test_user.id, "post", disliked.id, "dislike")

        assert _titles(list_posts(db_session, " Liked ", viewer_id=test_user.id)) == ["Liked"]

    @pytest.mark.parametrize("filter_", ["mine", "liked"])
    def test_guest_cannot_filter_own_posts(self, db_session, filter_):
        with pytest.raises(AuthError):
            list_posts(db_session, filter_)

    def test_unknown_filter(self, db_session):
        with pytest.raises(ValidationError):
            list_posts(db_session, "popular")

    def test_list_carries_counts_without_comment_bodies(self, db_session, test_user, make_post):
        post = make_post(test_user)
        toggle_reaction(db_session, test_user.id, "post", post.id, "dislike")

        view = list_posts(db_session, viewer_id=test_user.id)[0]

        assert (view.likes, view.dislikes) == (0, 1)
        assert view.viewer_reaction == -1
        assert view.categories == ["Technology"]
        assert view.comments == []


def test_normalize_filter():
    assert normalize_filter(None) == ""
    assert normalize_filter(" MINE ") == "mine"
