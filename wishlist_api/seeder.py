"""
Bootstrap data: creates the first admin account from configuration.
Safe to run repeatedly.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from .config import SEED_ADMIN_EMAIL, SEED_ADMIN_NAME, SEED_ADMIN_PASSWORD
from .models import ROLE_ADMIN, ROLE_USER, User
from .security_utils import hash_password
from .shared.validators import validate_email

logger = logging.getLogger(__name__)


def seed_database(
    db: Session,
    email: Optional[str] = SEED_ADMIN_EMAIL,
    password: Optional[str] = SEED_ADMIN_PASSWORD,
    full_name: Optional[str] = SEED_ADMIN_NAME,
) -> Optional[User]:
    """Create the admin account if it does not exist yet; returns it (or None if unconfigured)"""
    if not email or not password:
        logger.info("ℹ️ SEED_ADMIN_EMAIL/SEED_ADMIN_PASSWORD not set - skipping seed")
        return None

    email = validate_email(email)
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        logger.info(f"Admin account {email} already exists")
        return existing

    logger.info("Seeding data....")
    admin = User(
        email=email,
        full_name=full_name,
        password_hash=hash_password(password),
        roles=[ROLE_ADMIN, ROLE_USER],
        status="active",
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"✅ Seeded admin account {email}")
    return admin
