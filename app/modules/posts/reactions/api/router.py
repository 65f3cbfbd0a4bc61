from typing import Any
import logging

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import check_csrf, get_current_session, get_current_user, parse_id
from app.modules.auth.models.session import Session as SessionModel
from app.modules.user_management.models.user import User
from app.modules.posts.reactions.schemas.reaction import ReactionCreate
from app.modules.posts.reactions.services.reaction import reaction_redirect, toggle_reaction

router = APIRouter()
logger = logging.getLogger("app")

@router.post("/reaction/")
def react(
    *,
    db: Session = Depends(get_db),
    target: str = Form(""),
    target_id: str = Form("", alias="id"),
    reaction_type: str = Form("", alias="type"),
    redirect: str = Form(""),
    csrf_token: str = Form(""),
    auth_session: SessionModel = Depends(get_current_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Like or dislike a post or comment, toggling off a repeated reaction"""
    check_csrf(auth_session, csrf_token)

    reaction_in = ReactionCreate(
        target=target,
        target_id=parse_id(target_id, f"This {target or 'target'} doesn't exist"),
        reaction_type=reaction_type,
        redirect=redirect,
    )
    result = toggle_reaction(
        db, current_user.id, reaction_in.target, reaction_in.target_id, reaction_in.reaction_type
    )
    logger.info(f"User {current_user.id} {reaction_in.target} {reaction_in.target_id} -> {result.state}")

    return RedirectResponse(
        reaction_redirect(db, reaction_in.target, reaction_in.target_id, reaction_in.redirect),
        status_code=status.HTTP_303_SEE_OTHER,
    )
