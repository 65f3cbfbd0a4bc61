from typing import Dict, List, Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, PersistenceError, ValidationError
from app.core.validators import validate_post
from app.modules.posts.models.post import Post, Category, PostCategory
from app.modules.posts.schemas.post import PostCreate, PostView
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.services.reaction import count_subquery, get_viewer_reactions
from app.modules.user_management.models.user import User

logger = logging.getLogger("app")


def get_post(db: Session, post_id: int) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()


def _get_or_create_category(db: Session, label: str) -> Category:
    category = db.query(Category).filter(Category.type == label).first()
    if category:
        return category

    # Savepoint so a concurrent creator of the same label doesn't abort the post
    try:
        with db.begin_nested():
            category = Category(type=label)
            db.add(category)
    except IntegrityError:
        category = db.query(Category).filter(Category.type == label).one()
    return category


def create_post(db: Session, post_in: PostCreate, author_id: int) -> Post:
    """Create a post and link its categories in a single transaction"""
    message = validate_post(post_in.title, post_in.content, post_in.categories)
    if message:
        raise ValidationError(message)

    logger.info(f"Creating post for author ID: {author_id}")
    try:
        post = Post(
            user_id=author_id,
            title=post_in.title.strip(),
            content=post_in.content.strip(),
        )
        db.add(post)
        db.flush()

        # dict.fromkeys keeps the submitted order while dropping duplicates
        for label in dict.fromkeys(post_in.categories):
            category = _get_or_create_category(db, label)
            db.add(PostCategory(post_id=post.id, category_id=category.id))

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create post for author {author_id}: {e}")
        raise PersistenceError() from e

    db.refresh(post)
    return post


def post_rows_query(db: Session):
    """Posts joined with author name, live reaction counts and comment count"""
    comment_count = (
        select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate_except(Comment)
        .scalar_subquery()
    )
    return (
        db.query(
            Post,
            User.name.label("author_name"),
            count_subquery("post", Post.id, True).label("likes"),
            count_subquery("post", Post.id, False).label("dislikes"),
            comment_count.label("comment_count"),
        )
        .join(User, User.id == Post.user_id)
    )


def get_categories_by_post(db: Session, post_ids: List[int]) -> Dict[int, List[str]]:
    if not post_ids:
        return {}

    rows = (
        db.query(PostCategory.post_id, Category.type)
        .join(Category, Category.id == PostCategory.category_id)
        .filter(PostCategory.post_id.in_(post_ids))
        .order_by(PostCategory.post_id, Category.id)
        .all()
    )
    categories: Dict[int, List[str]] = {}
    for post_id, label in rows:
        categories.setdefault(post_id, []).append(label)
    return categories


def build_post_views(db: Session, rows, viewer_id: Optional[int] = None) -> List[PostView]:
    """Turn post_rows_query results into view models, keeping their order"""
    post_ids = [row.Post.id for row in rows]
    categories = get_categories_by_post(db, post_ids)
    reactions = get_viewer_reactions(db, viewer_id, "post", post_ids)

    return [
        PostView(
            id=row.Post.id,
            title=row.Post.title,
            content=row.Post.content,
            author_id=row.Post.user_id,
            author_name=row.author_name,
            created_at=row.Post.created_at,
            categories=categories.get(row.Post.id, []),
            likes=row.likes or 0,
            dislikes=row.dislikes or 0,
            comment_count=row.comment_count or 0,
            viewer_reaction=reactions.get(row.Post.id, 0),
        )
        for row in rows
    ]


def get_post_view(db: Session, post_id: int, viewer_id: Optional[int] = None) -> PostView:
    """Full post page model: post, categories, counts and its comments"""
    # Imported here to avoid a cycle: the comment service looks posts up through this module
    from app.modules.posts.comments.services.comment import get_comment_views

    row = post_rows_query(db).filter(Post.id == post_id).first()
    if row is None:
        raise NotFound("This post doesn't exist")

    view = build_post_views(db, [row], viewer_id)[0]
    view.comments = get_comment_views(db, post_id, viewer_id)
    view.comment_count = len(view.comments)
    return view
