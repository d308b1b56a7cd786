# ABOUTME: SQLModel for a deduplicated company shared across crawl sessions.
# ABOUTME: The canonical LinkedIn URL is the unique dedupe key.

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Company(SQLModel, table=True):
    """Represents a LinkedIn company or school page."""

    __tablename__ = "companies"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    linkedin_url: str = Field(unique=True, index=True, description="Canonical company page URL")
    logo_url: str | None = None
    description: str | None = None

    # Reserved for richer company pages; search cards rarely carry these.
    industry: str | None = None
    size: str | None = None
    location: str | None = None
    website: str | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
