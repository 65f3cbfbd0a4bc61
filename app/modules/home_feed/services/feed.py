from typing import List, Optional
import logging

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthError, PersistenceError, ValidationError
from app.modules.posts.models.post import Post as PostModel, Category, PostCategory
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.schemas.post import PostView
from app.modules.posts.services.post import build_post_views, post_rows_query

logger = logging.getLogger("app")

FEED_FILTERS = ("", "mine", "liked")


def normalize_filter(filter_: Optional[str]) -> str:
    filter_ = (filter_ or "").strip().lower()
    if filter_ not in FEED_FILTERS:
        raise ValidationError("Unknown filter")
    return filter_


def list_posts(
    db: Session,
    filter_: str = "",
    categories: Optional[List[str]] = None,
    viewer_id: Optional[int] = None,
) -> List[PostView]:
    """
    Posts for the home page, newest first.

    filter_ "mine" keeps the viewer's own posts and "liked" the posts the
    viewer liked; both need a logged in viewer. A non-empty categories list
    keeps posts carrying at least one of them.
    """
    filter_ = normalize_filter(filter_)
    if filter_ and not viewer_id:
        raise AuthError("Log in to filter your posts")

    query = _build_feed_query(db, filter_, categories or [], viewer_id)
    try:
        rows = query.all()
        return build_post_views(db, rows, viewer_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load posts (filter={filter_!r}, categories={categories}): {e}")
        raise PersistenceError() from e


def _build_feed_query(db: Session, filter_: str, categories: List[str], viewer_id: Optional[int]):
    query = post_rows_query(db)

    if filter_ == "mine":
        query = query.filter(PostModel.user_id == viewer_id)
    elif filter_ == "liked":
        liked = (
            select(Reaction.post_id)
            .where(Reaction.user_id == viewer_id, Reaction.is_like.is_(True))
        )
        query = query.filter(PostModel.id.in_(liked))

    if categories:
        tagged = (
            select(PostCategory.post_id)
            .join(Category, Category.id == PostCategory.category_id)
            .where(Category.type.in_(categories))
        )
        query = query.filter(PostModel.id.in_(tagged))

    return query.order_by(desc(PostModel.created_at), desc(PostModel.id))
