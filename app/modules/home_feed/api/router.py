from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.templates import render
from app.db.session import get_db
from app.deps import clear_stale_cookie, get_optional_session, get_optional_user
from app.modules.auth.models.session import Session as SessionModel
from app.modules.home_feed.schemas.feed import FeedPage
from app.modules.home_feed.services.feed import list_posts, normalize_filter
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema

router = APIRouter()

@router.get("/")
def read_home_feed(
    request: Request,
    filter_: str = Query("", alias="filter"),
    category: List[str] = Query([]),
    db: Session = Depends(get_db),
    auth_session: Optional[SessionModel] = Depends(get_optional_session),
    current_user: Optional[User] = Depends(get_optional_user),
) -> Any:
    """
    Home page: every post, or the viewer's own / liked posts, optionally
    narrowed to some categories.
    """
    viewer_id = current_user.id if current_user else None
    posts = list_posts(db, filter_, category, viewer_id)

    page = FeedPage(
        viewer=UserSchema.model_validate(current_user) if current_user else None,
        csrf_token=auth_session.csrf_token if auth_session else "",
        posts=posts,
        filter=normalize_filter(filter_),
        selected_categories=category,
    )
    response = render(request, "index.html", {"page": page})
    return clear_stale_cookie(request, response, auth_session)
