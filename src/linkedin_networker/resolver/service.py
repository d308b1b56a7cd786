# ABOUTME: Entity resolver turning extracted cards into persisted rows.
# ABOUTME: Follows connection-summary links, synthesizes fallback names and writes junction rows.

import logging
from uuid import UUID

from linkedin_networker.database import DatabaseService
from linkedin_networker.extraction import (
    CompanyCard,
    ConnectionCandidate,
    CurrentCompany,
    DirectConnection,
    extract_current_company,
    extract_person_cards,
)
from linkedin_networker.extraction.text import CONNECTION_COUNT_RE, extract_direct_name
from linkedin_networker.linkedin.client import LinkedInClient
from linkedin_networker.linkedin.urls import CONNECTIONS_URL
from linkedin_networker.models import CompanyConnection, Connection

logger = logging.getLogger(__name__)

FALLBACK_CONNECTION_NAME = "Network Connection"
SINGLE_CONNECTION_NAME = "1st Degree Connection"


def connection_path(name: str) -> str:
    """Return the human-readable path from the crawling user to a person."""
    return f"You -> {name}"


def synthesize_connection_name(connection_info: str | None) -> str:
    """Name the single summarizing connection for a card with no resolved people.

    Args:
        connection_info: The card's caption, e.g. "3 connections work here".

    Returns:
        "1st Degree Connection" or "<N> Connections" for a count caption,
        else a name found directly in the caption, else "Network Connection".
    """
    if connection_info:
        match = CONNECTION_COUNT_RE.search(connection_info)
        if match is not None:
            count = int(match.group(1))
            return SINGLE_CONNECTION_NAME if count == 1 else f"{count} Connections"
        direct_name = extract_direct_name(connection_info)
        if direct_name:
            return direct_name
    return FALLBACK_CONNECTION_NAME


def _dedupe(people: list[ConnectionCandidate]) -> list[ConnectionCandidate]:
    seen: set[str] = set()
    unique = []
    for person in people:
        key = person.profile_url or person.name.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(person)
    return unique


class EntityResolver:
    """Reconciles extraction output with the session store.

    Companies are deduplicated by canonical URL, summary placeholders are
    resolved into individual people, and every accepted name becomes one
    Connection plus one CompanyConnection in the owning session.
    """

    def __init__(self, db_service: DatabaseService, client: LinkedInClient) -> None:
        """Initialize the resolver.

        Args:
            db_service: Store the rows are written to.
            client: Browser used to follow summary links and open profiles.
        """
        self._db_service = db_service
        self._client = client

    async def resolve_placeholder(
        self, placeholder: ConnectionCandidate
    ) -> list[ConnectionCandidate]:
        """Follow a summary link and return the people listed behind it.

        Any failure, or a page without a single valid name, keeps the
        placeholder itself so the company is not dropped.
        """
        search_url = placeholder.search_url or ""
        kept = placeholder.model_copy(update={"profile_url": None, "needs_resolution": False})
        try:
            await self._client.goto(search_url)
            html = await self._client.content()
            result = extract_person_cards(html, base_url=self._client.url or search_url)
        except Exception as e:
            logger.warning("Could not resolve %r (%s): %s", placeholder.name, search_url, e)
            return [kept]

        if not result.items:
            logger.warning("No names found behind %r (%s)", placeholder.name, search_url)
            return [kept]

        logger.info("Resolved %r into %d people", placeholder.name, len(result.items))
        return [person.model_copy(update={"search_url": search_url}) for person in result.items]

    async def resolve_connections(self, card: CompanyCard) -> list[ConnectionCandidate]:
        """Return the people to record for a company card.

        Placeholders are resolved first; when the card yields nobody, a single
        synthesized connection is returned instead.
        """
        people: list[ConnectionCandidate] = []
        for candidate in card.connections:
            if candidate.needs_resolution and candidate.search_url:
                people.extend(await self.resolve_placeholder(candidate))
            else:
                people.append(candidate)

        if not people:
            people = [
                ConnectionCandidate(
                    name=synthesize_connection_name(card.connection_info),
                    headline=card.connection_info,
                )
            ]
        return _dedupe(people)

    def persist_company(
        self,
        session_id: UUID,
        card: CompanyCard,
        people: list[ConnectionCandidate],
    ) -> list[CompanyConnection]:
        """Upsert the company and write one connection and link per person."""
        company = self._db_service.upsert_company(
            name=card.name,
            linkedin_url=card.linkedin_url,
            logo_url=card.logo_url,
            description=card.description,
        )

        links = []
        for person in people:
            connection = self._db_service.create_connection(
                Connection(
                    crawl_session_id=session_id,
                    name=person.name,
                    headline=person.headline or card.connection_info,
                    profile_url=person.profile_url,
                    profile_image_url=person.profile_image_url,
                    connection_source=person.search_url or card.linkedin_url,
                    company=card.name,
                    company_url=card.linkedin_url,
                    company_logo_url=card.logo_url,
                    connection_degree=1,
                )
            )
            links.append(
                self._db_service.create_company_connection(
                    company_id=company.id,
                    connection_id=connection.id,
                    crawl_session_id=session_id,
                    connection_path=connection_path(connection.name),
                )
            )
        return links

    async def process_company(self, session_id: UUID, card: CompanyCard) -> int:
        """Resolve and persist one company card.

        Returns:
            Number of connections recorded for the company.
        """
        people = await self.resolve_connections(card)
        links = self.persist_company(session_id, card, people)
        logger.info("Recorded %d connection(s) at %s", len(links), card.name)
        return len(links)

    def persist_friend(
        self,
        session_id: UUID,
        friend: DirectConnection,
        company: CurrentCompany | None,
    ) -> CompanyConnection | None:
        """Record a direct connection at their current employer.

        Returns:
            The link row, or None when the employer has no company page URL.
        """
        if company is None or not company.linkedin_url:
            logger.warning("No company page found for %s; skipping", friend.name)
            return None

        stored_company = self._db_service.upsert_company(
            name=company.name, linkedin_url=company.linkedin_url
        )
        connection = self._db_service.create_connection(
            Connection(
                crawl_session_id=session_id,
                name=friend.name,
                headline=friend.headline,
                profile_url=friend.profile_url,
                connection_source=CONNECTIONS_URL,
                company=company.name,
                company_url=company.linkedin_url,
                connection_degree=1,
            )
        )
        return self._db_service.create_company_connection(
            company_id=stored_company.id,
            connection_id=connection.id,
            crawl_session_id=session_id,
            connection_path=connection_path(connection.name),
        )

    async def analyze_friend(
        self, session_id: UUID, friend: DirectConnection
    ) -> CompanyConnection | None:
        """Open a connection's profile and record their current employer."""
        await self._client.goto(friend.profile_url)
        html = await self._client.content()
        company = extract_current_company(html, base_url=self._client.url or friend.profile_url)
        return self.persist_friend(session_id, friend, company)
