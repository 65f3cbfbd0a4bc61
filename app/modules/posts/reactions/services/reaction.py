from typing import Dict, Iterable, Optional, Union
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, PersistenceError, ValidationError
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.reactions.schemas.reaction import REACTION_TYPES, ReactionState

logger = logging.getLogger("app")

TARGET_COLUMNS = {
    "post": Reaction.post_id,
    "comment": Reaction.comment_id,
}


def _target_column(target: str):
    try:
        return TARGET_COLUMNS[target]
    except KeyError:
        raise ValidationError("You can only react to a post or a comment")


def _state(is_like: bool) -> int:
    return 1 if is_like else -1


def get_target(db: Session, target: str, target_id: int) -> Union[Post, Comment]:
    """Get the post or comment being reacted to or raise NotFound"""
    _target_column(target)
    model = Post if target == "post" else Comment
    obj = db.query(model).filter(model.id == target_id).first()
    if not obj:
        raise NotFound(f"This {target} doesn't exist")
    return obj


def get_reaction(db: Session, user_id: int, target: str, target_id: int) -> Optional[Reaction]:
    """Get reaction by user ID and target"""
    column = _target_column(target)
    return (
        db.query(Reaction)
        .filter(Reaction.user_id == user_id, column == target_id)
        .first()
    )


def count_subquery(target: str, outer_id, is_like: bool):
    """Correlated COUNT of likes or dislikes for the target in the outer query"""
    column = _target_column(target)
    return (
        select(func.count(Reaction.id))
        .where(column == outer_id, Reaction.is_like == is_like)
        .correlate_except(Reaction)
        .scalar_subquery()
    )


def get_viewer_reactions(db: Session, user_id: Optional[int], target: str, target_ids: Iterable[int]) -> Dict[int, int]:
    """Map target id -> -1/1 for every target the viewer has an opinion on"""
    target_ids = list(target_ids)
    if not user_id or not target_ids:
        return {}

    column = _target_column(target)
    rows = (
        db.query(column, Reaction.is_like)
        .filter(Reaction.user_id == user_id, column.in_(target_ids))
        .all()
    )
    return {target_id: _state(is_like) for target_id, is_like in rows}


def _apply_toggle(db: Session, user_id: int, target: str, target_id: int, is_like: bool) -> int:
    existing = get_reaction(db, user_id, target, target_id)

    if existing is None:
        reaction = Reaction(user_id=user_id, is_like=is_like)
        setattr(reaction, _target_column(target).key, target_id)
        db.add(reaction)
        db.flush()
        return _state(is_like)

    if existing.is_like == is_like:
        # Same reaction twice retracts it
        db.delete(existing)
        db.flush()
        return 0

    existing.is_like = is_like
    db.flush()
    return _state(is_like)


def toggle_reaction(db: Session, user_id: int, target: str, target_id: int, reaction_type: str) -> ReactionState:
    """
    Apply a like or dislike from a user to a post or comment.

    none + like -> liked, liked + like -> none, liked + dislike -> disliked
    (and symmetrically for dislike). When a concurrent request inserted the
    row first, the unique constraint rejects our insert and the toggle is
    applied once more against the row that won.
    """
    if reaction_type not in REACTION_TYPES:
        raise ValidationError("Unknown reaction type")
    get_target(db, target, target_id)
    is_like = reaction_type == "like"

    for attempt in range(2):
        try:
            state = _apply_toggle(db, user_id, target, target_id, is_like)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if attempt:
                logger.error(f"Reaction of user {user_id} on {target} {target_id} failed twice: {e}")
                raise PersistenceError() from e
            logger.warning(f"Concurrent reaction of user {user_id} on {target} {target_id}, re-applying")
            continue
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to store reaction of user {user_id} on {target} {target_id}: {e}")
            raise PersistenceError() from e

        return ReactionState(target=target, target_id=target_id, state=state)


def reaction_redirect(db: Session, target: str, target_id: int, redirect: str = "") -> str:
    """Where to send the user after reacting"""
    if target == "comment":
        comment = get_target(db, target, target_id)
        return f"/posts/{comment.post_id}"

    if redirect == "home":
        return "/"
    return f"/posts/{target_id}"
