"""
Local persisted state (SQLite settings store).
"""

from .local_database import LocalDatabase, get_local_database

__all__ = ["LocalDatabase", "get_local_database"]
