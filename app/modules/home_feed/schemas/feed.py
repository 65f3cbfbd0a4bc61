from typing import List, Optional
from pydantic import BaseModel, Field

from app.core.validators import ALLOWED_CATEGORIES
from app.modules.posts.schemas.post import PostView
from app.modules.user_management.schemas.user import User

class FeedPage(BaseModel):
    """Everything the home page template needs"""
    viewer: Optional[User] = None
    csrf_token: str = ""
    posts: List[PostView] = Field(default_factory=list)
    filter: str = ""
    selected_categories: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=lambda: list(ALLOWED_CATEGORIES))
