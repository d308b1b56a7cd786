# ABOUTME: Junction SQLModel linking a company, a connection and their crawl session.
# ABOUTME: Also defines the joined result row rendered by the CLI and exporter.

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel
from sqlmodel import Field, SQLModel


class CompanyConnection(SQLModel, table=True):
    """Links one connection to one company within a crawl session."""

    __tablename__ = "company_connections"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    company_id: UUID = Field(foreign_key="companies.id", ondelete="CASCADE", index=True)
    connection_id: UUID = Field(foreign_key="connections.id", ondelete="CASCADE")
    crawl_session_id: UUID = Field(
        foreign_key="crawl_sessions.id", ondelete="CASCADE", index=True
    )
    connection_path: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CompanyConnectionResult(BaseModel):
    """A company-connection link joined back to its company and connection."""

    id: UUID
    connection_path: str
    created_at: datetime

    company_id: UUID
    company_name: str
    company_linkedin_url: str
    company_logo_url: str | None = None
    company_description: str | None = None

    connection_id: UUID
    connection_name: str
    connection_headline: str | None = None
    connection_profile_url: str | None = None
    connection_profile_image_url: str | None = None
    connection_source: str | None = None
    connection_degree: int
