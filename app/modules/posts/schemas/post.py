from typing import List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from app.modules.posts.comments.schemas.comment import CommentView

class PostBase(BaseModel):
    title: str = ""
    content: str = ""

class PostCreate(PostBase):
    categories: List[str] = Field(default_factory=list)

class PostView(PostBase):
    """Post with author, categories and live reaction counts"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    author_name: str
    created_at: datetime
    categories: List[str] = Field(default_factory=list)
    likes: int = 0
    dislikes: int = 0
    comment_count: int = 0
    viewer_reaction: int = 0  # -1 disliked, 0 neutral, 1 liked
    comments: List[CommentView] = Field(default_factory=list)
