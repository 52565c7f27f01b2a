"""Account repository - Database operations for users and tokens"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Token, User


class AccountRepository:
    """Repository for account database operations"""

    @staticmethod
    def count_users(db: Session) -> int:
        return db.query(User).count()

    @staticmethod
    def get_users(db: Session, skip: int = 0, top: Optional[int] = None) -> list[User]:
        """Get users ordered by email, optionally paged"""
        query = db.query(User).order_by(User.email.asc()).offset(skip)
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_users_by_role(db: Session, role: str) -> list[User]:
        """Get users holding a role (roles is a JSON list, so filtered in Python)"""
        return [user for user in db.query(User).order_by(User.email.asc()).all() if user.has_role(role)]

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        """Create a new user"""
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        """Delete a user (tokens and wishlists cascade)"""
        db.delete(user)
        db.commit()

    # Token Methods
    @staticmethod
    def create_token(
        db: Session,
        user_id: int,
        jti: str,
        expires_in: int,
        expires_at: datetime,
        client_id: Optional[int] = None,
    ) -> Token:
        """Record an issued access token; the caller commits"""
        token = Token(
            user_id=user_id,
            client_id=client_id,
            login_provider="client" if client_id else "local",
            name="access_token",
            value=jti,
            scope="*",
            type="bearer",
            expires_in=expires_in,
            expires_at=expires_at,
        )
        db.add(token)
        return token

    @staticmethod
    def create_refresh_token(
        db: Session,
        user_id: int,
        digest: str,
        expires_in: int,
        expires_at: datetime,
        client_id: Optional[int] = None,
        scope: str = "*",
    ) -> Token:
        """Record a refresh token by its digest; the caller commits"""
        token = Token(
            user_id=user_id,
            client_id=client_id,
            login_provider="client" if client_id else "local",
            name="refresh_token",
            value=digest,
            scope=scope,
            type="refresh",
            expires_in=expires_in,
            expires_at=expires_at,
        )
        db.add(token)
        return token

    @staticmethod
    def get_refresh_token(db: Session, digest: str) -> Optional[Token]:
        return (
            db.query(Token)
            .filter(Token.value == digest, Token.name == "refresh_token")
            .first()
        )

    @staticmethod
    def revoke_client_tokens(db: Session, client_id: int) -> int:
        """Revoke every live token (access and refresh) held by a client; the caller commits"""
        return (
            db.query(Token)
            .filter(Token.client_id == client_id, Token.revoked.is_(False))
            .update({Token.revoked: True}, synchronize_session=False)
        )

    @staticmethod
    def revoke_token(db: Session, token: Token) -> Token:
        token.revoked = True
        db.commit()
        db.refresh(token)
        return token

    @staticmethod
    def delete_expired_tokens(db: Session, user_id: int) -> int:
        """Drop expired tokens for a user; returns how many were removed"""
        removed = (
            db.query(Token)
            .filter(Token.user_id == user_id, Token.expires_at < datetime.utcnow())
            .delete(synchronize_session=False)
        )
        db.commit()
        return removed
