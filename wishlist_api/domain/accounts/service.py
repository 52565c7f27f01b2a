"""Account service - Business logic for accounts and sign-in"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS
from ...models import Token, User
from ...security_utils import (
    create_access_token,
    create_refresh_token,
    hash_password,
    hash_token,
    verify_password,
)
from .repository import AccountRepository
from .schemas import AccountCreate, AccountUpdate, LoginRequest, RefreshRequest

logger = logging.getLogger(__name__)


class AccountService:
    """Service layer for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountRepository()

    def get_accounts(self, skip: int = 0, top: int | None = None) -> tuple[int, list[User]]:
        """Get (total count, users) for a page; top=None returns everything"""
        count = self.repo.count_users(self.db)
        return count, self.repo.get_users(self.db, skip, top)

    def get_accounts_by_role(self, role: str) -> list[User]:
        return self.repo.get_users_by_role(self.db, role)

    def get_account(self, user_id: int) -> User:
        """Get a specific account"""
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="Account not found")
        return user

    def create_account(self, data: AccountCreate) -> User:
        """Create a new account"""
        if self.repo.get_user_by_email(self.db, data.email):
            raise HTTPException(status_code=409, detail="An account with this email already exists")

        logger.info(f"🆕 Creating account: {data.email}")
        return self.repo.create_user(
            self.db,
            email=data.email,
            full_name=data.fullName,
            password_hash=hash_password(data.password),
            roles=data.roles,
            status=data.status,
        )

    def update_account(self, user_id: int, data: AccountUpdate) -> User:
        """Update an account"""
        user = self.get_account(user_id)

        if data.email and data.email != user.email:
            if self.repo.get_user_by_email(self.db, data.email):
                raise HTTPException(
                    status_code=409, detail="An account with this email already exists"
                )

        updates = {
            "email": data.email,
            "full_name": data.fullName,
            "roles": data.roles,
            "status": data.status,
        }
        if data.password:
            updates["password_hash"] = hash_password(data.password)

        return self.repo.update_user(self.db, user, **updates)

    def delete_account(self, user_id: int) -> dict:
        """Delete an account"""
        user = self.get_account(user_id)
        self.repo.delete_user(self.db, user)
        logger.info(f"✅ Account {user_id} deleted")
        return {"status": True}

    # Sign-in Methods
    def login(self, data: LoginRequest) -> dict:
        """Check credentials and issue a bearer token"""
        email = data.email.strip().lower()
        user = self.repo.get_user_by_email(self.db, email)

        if not user or not verify_password(data.password, user.password_hash):
            # Don't tell the caller which half was wrong
            logger.warning(f"⚠️ Failed sign-in for {email}")
            raise HTTPException(status_code=401, detail="Invalid email or password")

        if user.status != "active":
            logger.warning(f"⚠️ Sign-in refused for {email}: account is {user.status}")
            raise HTTPException(status_code=401, detail="Account is not active")

        self.repo.delete_expired_tokens(self.db, user.id)

        tokens = self.issue_tokens(user)
        logger.info(f"✅ Issued access token for {email}")
        return tokens

    def refresh(self, data: RefreshRequest) -> dict:
        """Exchange a refresh token for a new token pair; the old one is revoked"""
        stored = self.repo.get_refresh_token(self.db, hash_token(data.refresh_token))
        if not stored or stored.revoked or stored.expires_at < datetime.utcnow():
            logger.warning("⚠️ Rejected unknown, revoked or expired refresh token")
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        user = stored.user
        if not user or user.status != "active":
            raise HTTPException(status_code=401, detail="Account is not active")
        if stored.client is not None and stored.client.status != "active":
            raise HTTPException(status_code=401, detail="Client is not active")

        stored.revoked = True
        tokens = self.issue_tokens(user, client_id=stored.client_id)
        logger.info(f"🔄 Refresh token {stored.id} rotated for user {user.id}")
        return tokens

    def issue_tokens(self, user: User, client_id: Optional[int] = None) -> dict:
        """Create and persist an access and refresh token pair in one commit"""
        token, jti, expires_at = create_access_token(user.id, user.roles or [])
        expires_in = ACCESS_TOKEN_EXPIRE_MINUTES * 60
        self.repo.create_token(self.db, user.id, jti, expires_in, expires_at, client_id=client_id)

        refresh_token, digest, refresh_expires_at = create_refresh_token()
        self.repo.create_refresh_token(
            self.db,
            user.id,
            digest,
            REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
            refresh_expires_at,
            client_id=client_id,
        )
        self.db.commit()

        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": expires_in,
            "refresh_token": refresh_token,
        }

    def logout(self, token: Token) -> dict:
        """Revoke the presented token"""
        self.repo.revoke_token(self.db, token)
        logger.info(f"🔒 Token {token.id} revoked for user {token.user_id}")
        return {"status": True}
