from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, PersistenceError, ValidationError
from app.core.validators import validate_comment
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import CommentCreate, CommentView
from app.modules.posts.reactions.services.reaction import count_subquery, get_viewer_reactions
from app.modules.posts.services.post import get_post
from app.modules.user_management.models.user import User

logger = logging.getLogger("app")


def get_comment(db: Session, comment_id: int) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()


def get_comment_views(db: Session, post_id: int, viewer_id: Optional[int] = None) -> List[CommentView]:
    """Comments of a post, oldest first, with author and reaction counts"""
    rows = (
        db.query(
            Comment,
            User.name.label("author_name"),
            count_subquery("comment", Comment.id, True).label("likes"),
            count_subquery("comment", Comment.id, False).label("dislikes"),
        )
        .join(User, User.id == Comment.user_id)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    reactions = get_viewer_reactions(db, viewer_id, "comment", [row.Comment.id for row in rows])

    return [
        CommentView(
            id=row.Comment.id,
            post_id=row.Comment.post_id,
            author_id=row.Comment.user_id,
            author_name=row.author_name,
            content=row.Comment.content,
            created_at=row.Comment.created_at,
            likes=row.likes or 0,
            dislikes=row.dislikes or 0,
            viewer_reaction=reactions.get(row.Comment.id, 0),
        )
        for row in rows
    ]


def create_comment(db: Session, comment_in: CommentCreate, author_id: int) -> Comment:
    """Create a new comment"""
    message = validate_comment(comment_in.content)
    if message:
        raise ValidationError(message)

    if not get_post(db, comment_in.post_id):
        raise NotFound("This post doesn't exist")

    comment = Comment(
        post_id=comment_in.post_id,
        user_id=author_id,
        content=comment_in.content.strip(),
    )
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to insert comment on post {comment_in.post_id}: {e}")
        raise PersistenceError() from e

    db.refresh(comment)
    return comment
