from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AuthError, CSRFError, NotFound
from app.core.security import tokens_match
from app.db.session import get_db
from app.modules.auth.models.session import Session as SessionModel
from app.modules.auth.services import session as session_service
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import get_user

def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

def get_optional_session(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> Optional[SessionModel]:
    """
    Dependency for the live session of the request, None for guests
    """
    return session_service.get_session(db, token)

def get_current_session(
    auth_session: Optional[SessionModel] = Depends(get_optional_session),
) -> SessionModel:
    """
    Dependency for pages that need a logged in user
    """
    if auth_session is None:
        raise AuthError("Invalid or expired session")
    return auth_session

def get_optional_user(
    db: Session = Depends(get_db),
    auth_session: Optional[SessionModel] = Depends(get_optional_session),
) -> Optional[User]:
    if auth_session is None:
        return None
    return get_user(db, user_id=auth_session.user_id)

def get_current_user(
    db: Session = Depends(get_db),
    auth_session: SessionModel = Depends(get_current_session),
) -> User:
    """
    Dependency for getting current authenticated user
    """
    user = get_user(db, user_id=auth_session.user_id)
    if not user:
        raise AuthError("User not found")
    return user

# Largest value a database INTEGER column can hold
MAX_ID = 2**63 - 1

def parse_id(raw: Optional[str], message: str = "Page not found") -> int:
    """Path and form ids are plain positive integers; anything else is a 404"""
    if not raw or not raw.isascii() or not raw.isdigit() or len(raw) > 19:
        raise NotFound(message)
    value = int(raw)
    if value > MAX_ID:
        raise NotFound(message)
    return value

def check_csrf(auth_session: SessionModel, form_token: Optional[str]) -> None:
    if not tokens_match(auth_session.csrf_token, form_token):
        raise CSRFError()

def set_session_cookie(response: Response, auth_session: SessionModel) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=auth_session.id,
        max_age=int(session_service.session_lifetime().total_seconds()),
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )

def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )

def clear_stale_cookie(request: Request, response: Response, auth_session: Optional[SessionModel]) -> Response:
    """Guests still presenting a dead session cookie get it removed"""
    if auth_session is None and get_session_token(request):
        clear_session_cookie(response)
    return response
