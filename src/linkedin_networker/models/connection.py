# ABOUTME: SQLModel for a person discovered during one crawl session.
# ABOUTME: Rows are scoped to their session and removed with it.

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


class Connection(SQLModel, table=True):
    """Represents a person found through the crawling user's network."""

    __tablename__ = "connections"
    __table_args__ = (
        CheckConstraint("connection_degree IN (1, 2)", name="ck_connections_degree"),
        CheckConstraint("length(trim(name)) > 0", name="ck_connections_name"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    crawl_session_id: UUID = Field(
        foreign_key="crawl_sessions.id", ondelete="CASCADE", index=True
    )

    name: str
    headline: str | None = None
    profile_url: str | None = None
    profile_image_url: str | None = None
    connection_source: str | None = Field(
        default=None, description="Which company or search context surfaced this person"
    )

    company: str | None = None
    company_url: str | None = None
    company_logo_url: str | None = None

    connection_degree: int = Field(ge=1, le=2, index=True, description="1st or 2nd degree")

    mutual_connection: str | None = None
    location: str | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
