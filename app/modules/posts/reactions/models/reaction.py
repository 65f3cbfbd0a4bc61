from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, DateTime, ForeignKey, UniqueConstraint

from app.db.session import Base

class Reaction(Base):
    """A like or dislike from one user on exactly one post or comment"""

    __tablename__ = "reactions"
    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_reaction_user_post"),
        UniqueConstraint("user_id", "comment_id", name="uq_reaction_user_comment"),
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_reaction_single_target",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=True, index=True)
    comment_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    is_like = Column(Boolean, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
