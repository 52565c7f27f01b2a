import logging
from datetime import datetime

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import ROLE_ADMIN, Token, User
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Token:
    """Resolve the bearer credentials to a live token row"""
    if not credentials:
        logger.error("❌ No credentials provided")
        raise _unauthorized(
            "Not authenticated. Please provide a valid Bearer token in the Authorization header."
        )

    claims = decode_access_token(credentials.credentials)
    if not claims or not claims.get("jti") or not claims.get("sub"):
        raise _unauthorized("Invalid or expired token")

    token = (
        db.query(Token)
        .filter(Token.value == claims["jti"], Token.name == "access_token")
        .first()
    )
    if not token or token.revoked:
        logger.warning(f"⚠️ Token {claims['jti'][:8]}... is unknown or revoked")
        raise _unauthorized("Token has been revoked")

    if token.expires_at < datetime.utcnow():
        raise _unauthorized("Token has expired. Please sign in again.")

    if str(token.user_id) != str(claims["sub"]):
        logger.error(f"❌ Token subject mismatch for token {token.id}")
        raise _unauthorized("Invalid token claims")

    return token


def get_current_user(token: Token = Depends(get_current_token)) -> User:
    """Get current user from the bearer token"""
    user = token.user
    if not user or user.status != "active":
        logger.warning(f"⚠️ Inactive or missing user for token {token.id}")
        raise _unauthorized("Account is not active")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user


def require_roles(*roles: str):
    """
    Dependency factory restricting a route to users holding one of `roles`.
    Admins always pass.
    """

    def checker(user: User = Depends(get_current_user)) -> User:
        if user.has_role(ROLE_ADMIN, *roles):
            return user
        logger.warning(f"🚫 User {user.email} lacks role(s) {list(roles)}")
        raise HTTPException(status_code=403, detail="You do not have permission for this action")

    return checker
