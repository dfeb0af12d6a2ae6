"""
Seed Data
Resets the database and inserts demo users, stores and ratings

Usage:
    python -m storerate.db.seed
"""

import logging

from sqlalchemy.orm import Session

from storerate.core.auth import hash_password
from storerate.db.base import SessionLocal, drop_db, init_db
from storerate.models import Rating, Store, User, UserRole

logger = logging.getLogger(__name__)

# Shared password of every seeded account
SEED_PASSWORD = "password123A!"


def seed(db: Session) -> dict:
    """
    Insert demo data into an empty database

    Names are shorter than the registration minimum: seeding bypasses
    request validation.

    Returns:
        Counts of inserted rows by entity
    """
    password_hash = hash_password(SEED_PASSWORD)

    users = [
        User(id="admin-001", name="Admin User", email="admin@example.com",
             password_hash=password_hash, role=UserRole.ADMIN, address="123 Admin St"),
        User(id="user-001", name="John Doe", email="user@example.com",
             password_hash=password_hash, role=UserRole.USER, address="456 User Ave"),
        User(id="owner-001", name="Jane Smith", email="owner@example.com",
             password_hash=password_hash, role=UserRole.STORE_OWNER, address="789 Owner Blvd"),
    ]
    db.add_all(users)
    db.flush()

    stores = [
        Store(id="store-001", name="Tech Store", email="contact@techstore.com",
              address="100 Tech Plaza", owner_id="owner-001"),
        Store(id="store-002", name="Book Haven", email="info@bookhaven.com",
              address="200 Reading Rd", owner_id="owner-001"),
    ]
    db.add_all(stores)
    db.flush()

    ratings = [
        Rating(id="rating-001", user_id="user-001", store_id="store-001", rating=5),
        Rating(id="rating-002", user_id="user-001", store_id="store-002", rating=4),
    ]
    db.add_all(ratings)
    db.commit()

    counts = {"users": len(users), "stores": len(stores), "ratings": len(ratings)}
    logger.info(f"Seeded database: {counts}")
    return counts


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    logger.info("Resetting database...")
    drop_db()
    init_db()

    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()

    logger.info("Test accounts (password is SEED_PASSWORD in storerate/db/seed.py):")
    for email in ("admin@example.com", "user@example.com", "owner@example.com"):
        logger.info(f"  {email}")


if __name__ == "__main__":
    main()
