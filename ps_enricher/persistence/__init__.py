"""Database persistence layer."""
from .database import build_engine, init_db, session_scope
from .models import Base, ProblemStatement
from .store import ProblemStatementStore, open_store

__all__ = [
    "Base",
    "ProblemStatement",
    "ProblemStatementStore",
    "build_engine",
    "init_db",
    "open_store",
    "session_scope",
]
