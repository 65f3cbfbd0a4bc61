import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthError, PersistenceError, ValidationError
from app.core.security import get_password_hash, verify_password
from app.core.validators import validate_credentials
from app.modules.auth.models.session import Session as SessionModel
from app.modules.auth.services import session as session_service
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import get_user_by_email, get_user_by_name

logger = logging.getLogger("app")


def _check_available(db: Session, name: str, email: str) -> None:
    if get_user_by_name(db, name):
        raise ValidationError("Username already taken")
    if get_user_by_email(db, email):
        raise ValidationError("Email already registered")


def register_user(db: Session, user_in: UserCreate) -> User:
    """Validate the form and create the user. Does not log them in."""
    name = user_in.name.strip()
    email = user_in.email.strip().lower()

    message = validate_credentials(name, email, user_in.password)
    if message:
        raise ValidationError(message)

    _check_available(db, name, email)

    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(user_in.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race against another registration with the same name or email
        db.rollback()
        logger.info(f"Registration conflict for {name!r}: {e}")
        _check_available(db, name, email)
        raise PersistenceError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to register user {name!r}: {e}")
        raise PersistenceError() from e

    db.refresh(user)
    logger.info(f"Registered user {user.id} ({user.name})")
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    """Authenticate a user by name and password."""
    username = username.strip()
    if not username or not password.strip():
        raise ValidationError("Please complete your identification")

    user = get_user_by_name(db, username)
    if not user or not verify_password(password, user.hashed_password):
        raise AuthError("Invalid username or password")
    return user


def login(db: Session, user: User, current_token: Optional[str] = None) -> SessionModel:
    """
    Start a session for an authenticated user.

    A repeat login with a live session of the same user refreshes it; any
    other login replaces all of the user's previous sessions.
    """
    current = session_service.get_session(db, current_token)
    if current is not None and current.user_id == user.id:
        return session_service.refresh_session(db, user.id, current.id)

    session_service.revoke_user_sessions(db, user.id)
    return session_service.create_session(db, user.id)
