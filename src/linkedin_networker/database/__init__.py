# ABOUTME: Database package for LinkedIn networker persistence layer.
# ABOUTME: Provides DatabaseService for SQLite operations using SQLModel.

from linkedin_networker.database.exceptions import (
    InvalidRecordError,
    SessionNotFoundError,
    SessionStateError,
)
from linkedin_networker.database.service import DatabaseService

__all__ = [
    "DatabaseService",
    "InvalidRecordError",
    "SessionNotFoundError",
    "SessionStateError",
]
