# Implements security-related functionality:
# Password hashing and verification using bcrypt
# Random token generation for sessions and CSRF protection
# Provides core security functions used by the auth module

import hmac
import secrets

from passlib.context import CryptContext

from app.core.config import settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def generate_token(nbytes: int = None) -> str:
    """Cryptographically random hex token (256 bits by default)"""
    return secrets.token_hex(nbytes or settings.SESSION_TOKEN_BYTES)


def tokens_match(expected: str, provided: str) -> bool:
    if not expected or not provided:
        return False
    return hmac.compare_digest(expected, provided)
