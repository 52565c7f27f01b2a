"""Client repository - Database operations for API clients"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Client, Token


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def count_clients(db: Session) -> int:
        return db.query(Client).count()

    @staticmethod
    def get_clients(db: Session, skip: int = 0, top: Optional[int] = None) -> list[Client]:
        """Get clients ordered by name, optionally paged"""
        query = db.query(Client).order_by(Client.name.asc(), Client.id.asc()).offset(skip)
        if top is not None:
            query = query.limit(top)
        return query.all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client (its tokens cascade)"""
        db.delete(client)
        db.commit()

    @staticmethod
    def count_active_refresh_tokens(db: Session, client_id: int) -> int:
        return (
            db.query(Token)
            .filter(
                Token.client_id == client_id,
                Token.name == "refresh_token",
                Token.revoked.is_(False),
                Token.expires_at > datetime.utcnow(),
            )
            .count()
        )
