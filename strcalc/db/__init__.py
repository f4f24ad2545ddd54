"""
Database configuration and models.
"""

from strcalc.db.database import engine, SessionLocal, get_db_context, init_db
from strcalc.db.models import Base, InputSnapshot

__all__ = [
    "engine",
    "SessionLocal",
    "get_db_context",
    "init_db",
    "Base",
    "InputSnapshot",
]
