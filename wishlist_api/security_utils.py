"""
Password hashing and bearer token helpers
"""

import hashlib
import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    JWT_ALGORITHM,
    REFRESH_TOKEN_EXPIRE_DAYS,
    SECRET_KEY,
)

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# ACCESS TOKENS
# ============================================================================


def create_access_token(
    user_id: int, roles: list[str], expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES
) -> tuple[str, str, datetime]:
    """
    Create a signed access token.

    Returns (token, jti, expires_at). expires_at is naive UTC, matching the
    tokens table.
    """
    jti = uuid.uuid4().hex
    expires_at = datetime.utcnow() + timedelta(minutes=expires_minutes)
    claims = {
        "sub": str(user_id),
        "jti": jti,
        "roles": list(roles),
        "exp": expires_at,
        "iat": datetime.utcnow(),
    }
    token = jose_jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)
    return token, jti, expires_at


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """Verify signature and expiry; returns the claims or None"""
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.info(f"ℹ️ Rejected access token: {e}")
        return None


# ============================================================================
# REFRESH TOKENS
# ============================================================================


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token"""
    return secrets.token_urlsafe(length)


def hash_token(token: str) -> str:
    """Digest stored in place of a refresh token"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def create_refresh_token(expires_days: int = REFRESH_TOKEN_EXPIRE_DAYS) -> tuple[str, str, datetime]:
    """
    Create an opaque refresh token.

    Returns (token, digest, expires_at); only the digest is persisted.
    """
    token = generate_secure_token()
    return token, hash_token(token), datetime.utcnow() + timedelta(days=expires_days)
