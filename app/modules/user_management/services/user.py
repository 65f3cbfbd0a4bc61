from typing import Optional
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User

def get_user(db: Session, user_id: int) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_name(db: Session, name: str) -> Optional[User]:
    """Get user by name"""
    return db.query(User).filter(User.name == name).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email).first()
