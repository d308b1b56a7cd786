# ABOUTME: Tests for the entity resolver.
# ABOUTME: Covers placeholder resolution, synthesized names and persistence of both crawl modes.

from uuid import UUID

import pytest

from linkedin_networker.database import DatabaseService
from linkedin_networker.extraction import (
    CompanyCard,
    ConnectionCandidate,
    CurrentCompany,
    DirectConnection,
)
from linkedin_networker.linkedin.urls import CONNECTIONS_URL
from linkedin_networker.models import CrawlMode
from linkedin_networker.resolver import EntityResolver, connection_path, synthesize_connection_name

from conftest import ACME_PEOPLE_URL, ALICE_PROFILE_URL, FakeLinkedInClient

ACME_URL = "https://www.linkedin.com/company/acme-corp/"


def _placeholder(text: str = "2 connections work here") -> ConnectionCandidate:
    return ConnectionCandidate(name=text, search_url=ACME_PEOPLE_URL, needs_resolution=True)


def _acme(connections: list[ConnectionCandidate], info: str | None = None) -> CompanyCard:
    return CompanyCard(
        name="Acme Corp",
        linkedin_url=ACME_URL,
        connection_info=info,
        connections=connections,
    )


@pytest.fixture
def session_id(db_service: DatabaseService) -> UUID:
    return db_service.create_crawl_session(CrawlMode.FIRST_CONNECTIONS).id


class TestSynthesizeConnectionName:
    """Tests for naming a card's single summarizing connection."""

    @pytest.mark.parametrize(
        "info,expected",
        [
            ("3 connections work here", "3 Connections"),
            ("1 connection works here", "1st Degree Connection"),
            ("Jane and 12 other connections were hired here", "12 Connections"),
            ("Jane Smith works here", "Jane Smith"),
            ("Followed by people you know", "Network Connection"),
            (None, "Network Connection"),
        ],
    )
    def test_names(self, info: str | None, expected: str) -> None:
        """Counts become plural labels, literal names are kept, otherwise a fallback."""
        assert synthesize_connection_name(info) == expected

    def test_connection_path(self) -> None:
        """The path reads from the crawling user to the person."""
        assert connection_path("Jane Doe") == "You -> Jane Doe"


class TestResolvePlaceholder:
    """Tests for following summary links."""

    @pytest.mark.asyncio
    async def test_resolves_people(
        self, db_service: DatabaseService, people_search_page: str
    ) -> None:
        """People on the search page replace the placeholder."""
        client = FakeLinkedInClient({ACME_PEOPLE_URL: people_search_page})
        resolver = EntityResolver(db_service, client)

        people = await resolver.resolve_placeholder(_placeholder())

        assert client.visited == [ACME_PEOPLE_URL]
        (person,) = people
        assert person.name == "Jane Doe"
        assert person.search_url == ACME_PEOPLE_URL

    @pytest.mark.asyncio
    async def test_navigation_failure_keeps_placeholder(
        self, db_service: DatabaseService
    ) -> None:
        """A failed navigation keeps the summary link text as the name."""
        client = FakeLinkedInClient({}, failing_urls=(ACME_PEOPLE_URL,))
        resolver = EntityResolver(db_service, client)

        (kept,) = await resolver.resolve_placeholder(_placeholder())

        assert kept.name == "2 connections work here"
        assert kept.profile_url is None
        assert kept.needs_resolution is False
        assert kept.search_url == ACME_PEOPLE_URL

    @pytest.mark.asyncio
    async def test_empty_results_keep_placeholder(self, db_service: DatabaseService) -> None:
        """A search page without valid names keeps the placeholder."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))

        (kept,) = await resolver.resolve_placeholder(_placeholder())

        assert kept.name == "2 connections work here"


class TestResolveConnections:
    """Tests for building a card's final list of people."""

    @pytest.mark.asyncio
    async def test_card_without_people_gets_synthesized_connection(
        self, db_service: DatabaseService
    ) -> None:
        """A count caption with no links yields one synthesized person."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))

        (person,) = await resolver.resolve_connections(_acme([], "3 connections work here"))

        assert person.name == "3 Connections"
        assert person.headline == "3 connections work here"

    @pytest.mark.asyncio
    async def test_duplicates_removed(self, db_service: DatabaseService) -> None:
        """The same person reached twice is recorded once."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))
        jane = ConnectionCandidate(name="Jane Doe", profile_url="https://www.linkedin.com/in/j/")

        people = await resolver.resolve_connections(_acme([jane, jane.model_copy()]))

        assert len(people) == 1


class TestPersistence:
    """Tests for writing resolved people to the store."""

    @pytest.mark.asyncio
    async def test_process_company_writes_rows(
        self,
        db_service: DatabaseService,
        session_id: UUID,
        people_search_page: str,
    ) -> None:
        """Each resolved person becomes a connection linked to the company."""
        client = FakeLinkedInClient({ACME_PEOPLE_URL: people_search_page})
        resolver = EntityResolver(db_service, client)

        count = await resolver.process_company(session_id, _acme([_placeholder()]))

        assert count == 1
        (row,) = db_service.get_company_connections(session_id)
        assert row.company_name == "Acme Corp"
        assert row.connection_name == "Jane Doe"
        assert row.connection_path == "You -> Jane Doe"
        assert row.connection_source == ACME_PEOPLE_URL
        assert row.connection_degree == 1

    def test_synthesized_connection_source_is_company_url(
        self, db_service: DatabaseService, session_id: UUID
    ) -> None:
        """People without a search page point back at the company."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))

        resolver.persist_company(
            session_id,
            _acme([], "3 connections work here"),
            [ConnectionCandidate(name="3 Connections")],
        )

        (row,) = db_service.get_company_connections(session_id)
        assert row.connection_source == ACME_URL
        assert row.connection_headline == "3 connections work here"

    def test_company_reused_across_cards(
        self, db_service: DatabaseService, session_id: UUID
    ) -> None:
        """Persisting the same company twice keeps one company row."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))
        card = _acme([])

        resolver.persist_company(session_id, card, [ConnectionCandidate(name="Jane Doe")])
        resolver.persist_company(session_id, card, [ConnectionCandidate(name="John Roe")])

        rows = db_service.get_company_connections(session_id)
        assert len(rows) == 2
        assert rows[0].company_id == rows[1].company_id

    def test_persist_friend(self, db_service: DatabaseService, session_id: UUID) -> None:
        """A friend is linked to their employer with the connections page as source."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))
        friend = DirectConnection(name="Alice Wong", profile_url=ALICE_PROFILE_URL)
        employer = CurrentCompany(
            name="Initech", linkedin_url="https://www.linkedin.com/company/initech/"
        )

        link = resolver.persist_friend(session_id, friend, employer)

        assert link is not None
        (row,) = db_service.get_company_connections(session_id)
        assert row.company_name == "Initech"
        assert row.connection_source == CONNECTIONS_URL
        assert row.connection_path == "You -> Alice Wong"

    @pytest.mark.parametrize(
        "employer", [None, CurrentCompany(name="Freelance", linkedin_url=None)]
    )
    def test_friend_without_company_page_skipped(
        self,
        db_service: DatabaseService,
        session_id: UUID,
        employer: CurrentCompany | None,
    ) -> None:
        """Friends whose employer has no company URL are not recorded."""
        resolver = EntityResolver(db_service, FakeLinkedInClient({}))
        friend = DirectConnection(name="Bob Stone", profile_url="https://www.linkedin.com/in/b/")

        assert resolver.persist_friend(session_id, friend, employer) is None
        assert db_service.get_connections_by_session(session_id) == []
