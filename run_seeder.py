"""
Seed the bootstrap admin account
Usage: python run_seeder.py [email] [password]
Falls back to SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD from the environment.
"""
import logging
import sys

from wishlist_api.database import Base, SessionLocal, engine
from wishlist_api.seeder import seed_database

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


def run_seeder(email: str | None = None, password: str | None = None):
    """Create tables if needed, then seed"""
    Base.metadata.create_all(bind=engine, checkfirst=True)

    db = SessionLocal()
    try:
        kwargs = {}
        if email and password:
            kwargs = {"email": email, "password": password}
        admin = seed_database(db, **kwargs)
    finally:
        db.close()

    if admin is None:
        logger.error("No admin credentials given and SEED_ADMIN_EMAIL/SEED_ADMIN_PASSWORD not set")
        sys.exit(1)

    logger.info(f"✅ Admin account ready: {admin.email}")


if __name__ == "__main__":
    try:
        run_seeder(*sys.argv[1:3])
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        sys.exit(1)
