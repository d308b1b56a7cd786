# ABOUTME: SQLModel for a single crawl run and its lifecycle state.
# ABOUTME: Tracks mode, status, progress and the error text of a failed run.

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class CrawlMode(str, Enum):
    """Which part of the network a crawl walks."""

    FIRST_CONNECTIONS = "first_connections"
    FRIENDS_OF_FRIENDS = "friends_of_friends"


class CrawlStatus(str, Enum):
    """Lifecycle of a crawl session: pending -> running -> completed | failed."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Return True for statuses a session never leaves."""
        return self in (CrawlStatus.COMPLETED, CrawlStatus.FAILED)


class CrawlSession(SQLModel, table=True):
    """Represents one crawl run."""

    __tablename__ = "crawl_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    mode: CrawlMode
    status: CrawlStatus = CrawlStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100, description="Percent complete")
    total_connections: int | None = None
    processed_connections: int | None = 0
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        """Return True once the session has completed or failed."""
        return CrawlStatus(self.status).is_terminal
