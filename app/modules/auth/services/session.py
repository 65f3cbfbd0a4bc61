"""
Server-side session lifecycle.

A session row is keyed by a random 256-bit token that the browser carries in
the session cookie. Rows expire a fixed time after creation (or after the
last login refresh); an expired row is treated exactly like a missing one and
is deleted the first time it is observed.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from app.core.config import settings
from app.core.exceptions import AuthError, PersistenceError
from app.core.security import generate_token
from app.modules.auth.models.session import Session as SessionModel

logger = logging.getLogger("app")


def session_lifetime() -> timedelta:
    return timedelta(hours=settings.SESSION_LIFETIME_HOURS)


def create_session(db: Session, user_id: int) -> SessionModel:
    """Insert a new session for the user, regenerating the token on collision"""
    for attempt in range(1, settings.SESSION_TOKEN_ATTEMPTS + 1):
        now = datetime.utcnow()
        session = SessionModel(
            id=generate_token(),
            user_id=user_id,
            csrf_token=generate_token(),
            created_at=now,
            expires_at=now + session_lifetime(),
        )
        db.add(session)
        try:
            db.commit()
        except (IntegrityError, FlushError) as e:
            db.rollback()
            logger.warning(f"Session insert for user {user_id} rejected (attempt {attempt}): {e}")
            continue
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create session for user {user_id}: {e}")
            raise PersistenceError() from e

        db.refresh(session)
        logger.info(f"Session created for user {user_id}")
        return session

    logger.error(f"Giving up creating a session for user {user_id} after {settings.SESSION_TOKEN_ATTEMPTS} attempts")
    raise PersistenceError()


def get_session(db: Session, token: Optional[str]) -> Optional[SessionModel]:
    """Get a live session by token; expired rows are deleted on sight"""
    if not token:
        return None

    try:
        session = db.query(SessionModel).filter(SessionModel.id == token).first()
        if not session:
            return None
        if session.expires_at <= datetime.utcnow():
            logger.info(f"Removing expired session of user {session.user_id}")
            db.delete(session)
            db.commit()
            return None
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to read session: {e}")
        raise PersistenceError() from e

    return session


def validate_session(db: Session, token: Optional[str]) -> SessionModel:
    session = get_session(db, token)
    if session is None:
        raise AuthError("Invalid or expired session")
    return session


def refresh_session(db: Session, user_id: int, token: str) -> SessionModel:
    """Push the expiry of an existing session of this user a full lifetime forward"""
    session = (
        db.query(SessionModel)
        .filter(SessionModel.id == token, SessionModel.user_id == user_id)
        .first()
    )
    if not session:
        raise AuthError("Invalid or expired session")

    session.expires_at = datetime.utcnow() + session_lifetime()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to refresh session of user {user_id}: {e}")
        raise PersistenceError() from e

    db.refresh(session)
    return session


def revoke_session(db: Session, token: Optional[str]) -> None:
    """Delete a session by token. Unknown tokens are ignored."""
    if not token:
        return

    try:
        db.query(SessionModel).filter(SessionModel.id == token).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to revoke session: {e}")
        raise PersistenceError() from e


def revoke_user_sessions(db: Session, user_id: int) -> int:
    try:
        count = (
            db.query(SessionModel)
            .filter(SessionModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to revoke sessions of user {user_id}: {e}")
        raise PersistenceError() from e
    return count


def cleanup_expired_sessions(db: Session) -> int:
    """Delete all expired sessions. Returns count of deleted sessions."""
    count = (
        db.query(SessionModel)
        .filter(SessionModel.expires_at <= datetime.utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    return count
