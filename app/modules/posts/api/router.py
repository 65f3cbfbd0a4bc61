from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.templates import render
from app.core.validators import ALLOWED_CATEGORIES
from app.db.session import get_db
from app.deps import (
    check_csrf, clear_stale_cookie, get_current_session, get_current_user,
    get_optional_session, get_optional_user, parse_id,
)
from app.modules.auth.models.session import Session as SessionModel
from app.modules.user_management.models.user import User
from app.modules.posts.schemas.post import PostCreate
from app.modules.posts.services.post import create_post, get_post_view

logger = logging.getLogger("app")

router = APIRouter()


def render_post_form(request: Request, auth_session: SessionModel, post_in: PostCreate, message: str = "", status_code: int = 200):
    return render(
        request,
        "post_form.html",
        {
            "post": post_in,
            "message": message,
            "csrf_token": auth_session.csrf_token,
            "categories": ALLOWED_CATEGORIES,
        },
        status_code,
    )


def render_post_page(
    request: Request,
    db: Session,
    post_id: int,
    current_user: Optional[User],
    auth_session: Optional[SessionModel],
    message: str = "",
    content: str = "",
    status_code: int = 200,
):
    post = get_post_view(db, post_id, current_user.id if current_user else None)
    return render(
        request,
        "post.html",
        {
            "post": post,
            "viewer": current_user,
            "csrf_token": auth_session.csrf_token if auth_session else "",
            "message": message,
            "content": content,
        },
        status_code,
    )


@router.get("/create/post")
def new_post_page(
    request: Request,
    auth_session: SessionModel = Depends(get_current_session),
) -> Any:
    return render_post_form(request, auth_session, PostCreate())


@router.post("/create/post")
def create_new_post(
    request: Request,
    db: Session = Depends(get_db),
    title: str = Form(""),
    content: str = Form(""),
    categories: List[str] = Form([]),
    csrf_token: str = Form(""),
    auth_session: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Create a post with its categories, then go back to the home page.
    """
    check_csrf(auth_session, csrf_token)

    post_in = PostCreate(title=title, content=content, categories=categories)
    try:
        post = create_post(db, post_in, current_user.id)
    except ValidationError as e:
        return render_post_form(request, auth_session, post_in, e.message, e.status_code)

    logger.info(f"User {current_user.id} created post {post.id}")
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/posts/{post_id}")
def read_post_by_id(
    request: Request,
    post_id: str,
    db: Session = Depends(get_db),
    auth_session: Optional[SessionModel] = Depends(get_optional_session),
    current_user: Optional[User] = Depends(get_optional_user),
) -> Any:
    """
    Post page with its comments.
    """
    response = render_post_page(
        request, db, parse_id(post_id, "This post doesn't exist"), current_user, auth_session
    )
    return clear_stale_cookie(request, response, auth_session)
