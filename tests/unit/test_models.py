# ABOUTME: Unit tests for data models (CrawlSession, Company, Connection, CompanyConnection).
# ABOUTME: Tests validation, defaults and status helpers.

from datetime import datetime
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from linkedin_networker.extraction import CompanyCard
from linkedin_networker.models import (
    Company,
    CompanyConnection,
    Connection,
    CrawlMode,
    CrawlSession,
    CrawlStatus,
)


class TestCrawlStatus:
    """Tests for the CrawlStatus enum."""

    def test_values(self):
        """Test that statuses serialize to their lowercase names."""
        assert [s.value for s in CrawlStatus] == ["pending", "running", "completed", "failed"]

    @pytest.mark.parametrize(
        "status,terminal",
        [
            (CrawlStatus.PENDING, False),
            (CrawlStatus.RUNNING, False),
            (CrawlStatus.COMPLETED, True),
            (CrawlStatus.FAILED, True),
        ],
    )
    def test_is_terminal(self, status, terminal):
        """Test that only completed and failed are terminal."""
        assert status.is_terminal is terminal


class TestCrawlSession:
    """Tests for CrawlSession SQLModel."""

    def test_defaults(self):
        """Test that a new session is pending at zero progress."""
        crawl_session = CrawlSession(mode=CrawlMode.FRIENDS_OF_FRIENDS)

        assert isinstance(crawl_session.id, UUID)
        assert isinstance(crawl_session.created_at, datetime)
        assert crawl_session.status == CrawlStatus.PENDING
        assert crawl_session.progress == 0
        assert crawl_session.total_connections is None
        assert crawl_session.error is None
        assert crawl_session.is_terminal is False

    def test_progress_out_of_range_rejected(self):
        """Test that validated input keeps progress within 0-100."""
        with pytest.raises(ValidationError):
            CrawlSession.model_validate({"mode": "first_connections", "progress": 101})

    def test_unknown_mode_rejected(self):
        """Test that only the two crawl modes are accepted."""
        with pytest.raises(ValidationError):
            CrawlSession.model_validate({"mode": "third_degree"})


class TestConnection:
    """Tests for Connection SQLModel."""

    def test_create_with_required_fields(self):
        """Test creating a connection with only required fields."""
        connection = Connection(crawl_session_id=uuid4(), name="Jane Doe", connection_degree=1)

        assert connection.profile_url is None
        assert connection.connection_source is None
        assert isinstance(connection.created_at, datetime)

    def test_degree_validation_rejects_invalid(self):
        """Test that connection degree must be 1 or 2."""
        with pytest.raises(ValidationError):
            Connection.model_validate(
                {"crawl_session_id": uuid4(), "name": "Jane Doe", "connection_degree": 3}
            )


class TestCompanyModels:
    """Tests for Company, CompanyConnection and CompanyCard."""

    def test_company_optional_fields(self):
        """Test that only the name and URL are required."""
        company = Company(name="Acme", linkedin_url="https://www.linkedin.com/company/acme/")
        assert company.logo_url is None
        assert company.industry is None

    def test_company_connection_links_ids(self):
        """Test that a link carries all three foreign keys and its path."""
        ids = uuid4(), uuid4(), uuid4()
        link = CompanyConnection(
            company_id=ids[0],
            connection_id=ids[1],
            crawl_session_id=ids[2],
            connection_path="You -> Jane Doe",
        )
        assert (link.company_id, link.connection_id, link.crawl_session_id) == ids

    def test_company_card_description_length(self):
        """Test that extracted descriptions are capped at 200 characters plus ellipsis."""
        with pytest.raises(ValidationError):
            CompanyCard(
                name="Acme",
                linkedin_url="https://www.linkedin.com/company/acme/",
                description="x" * 204,
            )
