"""Login, registration and logout pages"""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import AuthError, ValidationError
from app.core.templates import render
from app.db.session import get_db
from app.deps import clear_session_cookie, get_session_token, set_session_cookie
from app.modules.auth.schemas.auth import LoginRequest
from app.modules.auth.services import auth as auth_service
from app.modules.auth.services import session as session_service
from app.modules.user_management.schemas.user import UserCreate

router = APIRouter()
logger = logging.getLogger("app")


def _logged_in_redirect(auth_session) -> RedirectResponse:
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, auth_session)
    return response


@router.get("/login")
def login_page(request: Request) -> Any:
    return render(request, "login.html", {"form": LoginRequest(), "message": ""})


@router.post("/login")
def login(
    request: Request,
    db: Session = Depends(get_db),
    username: str = Form(""),
    password: str = Form(""),
) -> Any:
    """Check the credentials and start a session"""
    form = LoginRequest(username=username, password=password)
    try:
        user = auth_service.authenticate(db, form.username, form.password)
    except ValidationError as e:
        return render(request, "login.html", {"form": form, "message": e.message}, e.status_code)
    except AuthError as e:
        logger.info(f"Failed login for {form.username!r}")
        return render(
            request,
            "login.html",
            {"form": form, "message": e.message},
            status.HTTP_401_UNAUTHORIZED,
        )

    auth_session = auth_service.login(db, user, get_session_token(request))
    logger.info(f"User {user.id} logged in")
    return _logged_in_redirect(auth_session)


@router.get("/register")
def register_page(request: Request) -> Any:
    return render(request, "register.html", {"form": {}, "message": ""})


@router.post("/register")
def register(
    request: Request,
    db: Session = Depends(get_db),
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
) -> Any:
    """Create the account and log the new user in"""
    try:
        user = auth_service.register_user(db, UserCreate(name=name, email=email, password=password))
    except ValidationError as e:
        return render(
            request,
            "register.html",
            {"form": {"name": name, "email": email}, "message": e.message},
            e.status_code,
        )

    auth_session = auth_service.login(db, user)
    return _logged_in_redirect(auth_session)


@router.get("/logout")
def logout(request: Request, db: Session = Depends(get_db)) -> Any:
    session_service.revoke_session(db, get_session_token(request))

    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    return response
