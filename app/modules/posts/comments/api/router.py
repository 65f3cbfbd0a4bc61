from typing import Any
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.db.session import get_db
from app.deps import check_csrf, get_current_session, get_current_user, parse_id
from app.modules.auth.models.session import Session as SessionModel
from app.modules.user_management.models.user import User
from app.modules.posts.api.router import render_post_page
from app.modules.posts.comments.schemas.comment import CommentCreate
from app.modules.posts.comments.services.comment import create_comment

router = APIRouter()
logger = logging.getLogger("app")

@router.post("/posts/{post_id}")
def create_new_comment(
    request: Request,
    post_id: str,
    db: Session = Depends(get_db),
    content: str = Form(""),
    csrf_token: str = Form(""),
    auth_session: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Create new comment on a post"""
    post_id = parse_id(post_id, "This post doesn't exist")
    check_csrf(auth_session, csrf_token)

    try:
        comment = create_comment(db, CommentCreate(content=content, post_id=post_id), current_user.id)
    except ValidationError as e:
        return render_post_page(
            request, db, post_id, current_user, auth_session,
            message=e.message, content=content, status_code=e.status_code,
        )

    logger.info(f"User {current_user.id} commented on post {post_id} (comment {comment.id})")
    return RedirectResponse(f"/posts/{post_id}", status_code=status.HTTP_303_SEE_OTHER)
