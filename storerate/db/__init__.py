"""
Database configuration and session management
"""

from storerate.db.base import Base, engine, SessionLocal, get_db, init_db, drop_db

__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_db", "drop_db"]
