"""Client service - Business logic for API clients"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client, User
from ...security_utils import generate_secure_token
from ..accounts.repository import AccountRepository
from ..accounts.service import AccountService
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()
        self.accounts = AccountRepository()

    def get_clients(self, skip: int = 0, top: Optional[int] = None) -> tuple[int, list[Client]]:
        count = self.repo.count_clients(self.db)
        return count, self.repo.get_clients(self.db, skip, top)

    def get_client(self, client_id: int) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def active_refresh_tokens(self, client: Client) -> int:
        return self.repo.count_active_refresh_tokens(self.db, client.id)

    def create_client(self, data: ClientCreate, current_user: User) -> Client:
        """Register a client for the given account (the caller by default)"""
        owner_id = data.userId or current_user.id
        if not self.accounts.get_user_by_id(self.db, owner_id):
            raise HTTPException(status_code=404, detail="Account not found")

        client = self.repo.create_client(
            self.db,
            user_id=owner_id,
            name=data.name.strip(),
            client_key=generate_secure_token(24),
            description=data.description,
            redirect_uri=data.redirectUri,
            status=data.statusId,
        )
        logger.info(f"🆕 Client {client.id} registered for user {owner_id}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = self.get_client(client_id)
        updates = {
            "name": data.name.strip() if data.name else None,
            "description": data.description,
            "redirect_uri": data.redirectUri,
            "status": data.statusId,
        }
        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> dict:
        client = self.get_client(client_id)
        self.repo.delete_client(self.db, client)
        logger.info(f"✅ Client {client_id} deleted")
        return {"status": True}

    def rotate_refresh_token(self, client_id: int) -> dict:
        """
        Revoke the client's refresh tokens and issue a fresh pair for its owner.

        The plain refresh token is returned once; only its digest is stored.
        """
        client = self.get_client(client_id)
        if client.status != "active":
            raise HTTPException(status_code=409, detail="Client is not active")
        if not client.user or client.user.status != "active":
            raise HTTPException(status_code=409, detail="Client owner is not active")

        revoked = self.accounts.revoke_client_tokens(self.db, client.id)
        tokens = AccountService(self.db).issue_tokens(client.user, client_id=client.id)
        logger.info(f"🔄 Client {client_id} refresh token rotated ({revoked} revoked)")
        return tokens
