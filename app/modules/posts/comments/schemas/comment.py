from datetime import datetime
from pydantic import BaseModel, ConfigDict

class CommentBase(BaseModel):
    content: str

class CommentCreate(CommentBase):
    post_id: int

class CommentView(CommentBase):
    """Comment as rendered under its post"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    author_id: int
    author_name: str
    created_at: datetime
    likes: int = 0
    dislikes: int = 0
    viewer_reaction: int = 0  # -1 disliked, 0 neutral, 1 liked
