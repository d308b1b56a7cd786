# ABOUTME: Crawl orchestrator driving one session through its state machine.
# ABOUTME: Runs the first_connections and friends_of_friends pipelines with pacing and progress.

import asyncio
import logging
from uuid import UUID

from linkedin_networker.auth import LinkedInCredentials
from linkedin_networker.config import Settings
from linkedin_networker.crawl.progress import ProgressReporter
from linkedin_networker.database import (
    DatabaseService,
    SessionNotFoundError,
    SessionStateError,
)
from linkedin_networker.extraction import extract_company_cards, extract_direct_connections
from linkedin_networker.linkedin.client import LinkedInClient
from linkedin_networker.linkedin.urls import COMPANY_SEARCH_URL, CONNECTIONS_URL
from linkedin_networker.models import CrawlMode, CrawlStatus
from linkedin_networker.rate_limit import RateLimiter
from linkedin_networker.resolver import EntityResolver

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Cancelled by user"

# Session-level errors stop the run; anything else inside an item loop is item-level.
FATAL_ITEM_ERRORS = (SessionNotFoundError, SessionStateError)


class CrawlOrchestrator:
    """Drives a crawl session from pending to completed or failed.

    One orchestrator run owns one browser client and is the only writer of
    its session row. Item-level failures are logged and skipped; any other
    error fails the session with its message and is not retried.
    """

    def __init__(
        self,
        db_service: DatabaseService,
        settings: Settings,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            db_service: Session store.
            settings: Application settings (pacing, friend cap).
            rate_limiter: Pacer between items. Defaults to one built from settings.
        """
        self._db_service = db_service
        self._settings = settings
        self._rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter(settings)

    async def run(
        self,
        session_id: UUID,
        credentials: LinkedInCredentials,
        client: LinkedInClient,
    ) -> CrawlStatus:
        """Run a session to a terminal status.

        The client is always closed on exit. Progress is never reset when
        the session fails.

        Args:
            session_id: A pending session.
            credentials: Login used for this run.
            client: Browser client owned by this run.

        Returns:
            COMPLETED or FAILED.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionStateError: If the session already finished.
        """
        crawl_session = self._db_service.get_crawl_session(session_id)
        if crawl_session is None:
            raise SessionNotFoundError(f"Crawl session '{session_id}' not found")

        self._db_service.update_crawl_session(
            crawl_session.id, status=CrawlStatus.RUNNING, progress=0
        )
        reporter = ProgressReporter(self._db_service, crawl_session.id)
        logger.info("Starting %s crawl for session %s", crawl_session.mode.value, session_id)

        try:
            await client.start()
            await client.login(credentials)
            reporter.report(5, "Logged in")

            resolver = EntityResolver(self._db_service, client)
            if crawl_session.mode == CrawlMode.FIRST_CONNECTIONS:
                await self._crawl_first_connections(crawl_session.id, client, resolver, reporter)
            else:
                await self._crawl_friends_of_friends(crawl_session.id, client, resolver, reporter)

            self._db_service.update_crawl_session(
                crawl_session.id, status=CrawlStatus.COMPLETED, progress=100
            )
            logger.info("Crawl session %s completed", session_id)
            return CrawlStatus.COMPLETED
        except asyncio.CancelledError:
            self._mark_failed(crawl_session.id, CANCELLED_MESSAGE)
            raise
        except Exception as e:
            logger.exception("Crawl session %s failed", session_id)
            self._mark_failed(crawl_session.id, str(e) or type(e).__name__)
            return CrawlStatus.FAILED
        finally:
            await client.close()

    def _mark_failed(self, session_id: UUID, message: str) -> None:
        try:
            self._db_service.update_crawl_session(
                session_id, status=CrawlStatus.FAILED, error=message
            )
        except (SessionNotFoundError, SessionStateError) as e:
            # Cancellation or deletion already finalized the row.
            logger.debug("Not marking session %s failed: %s", session_id, e)

    async def _crawl_first_connections(
        self,
        session_id: UUID,
        client: LinkedInClient,
        resolver: EntityResolver,
        reporter: ProgressReporter,
    ) -> None:
        await client.goto(COMPANY_SEARCH_URL)
        await client.scroll_to_load()
        reporter.report(10, "Loaded company search results")

        reporter.report(30, "Extracting companies")
        html = await client.content()
        companies = extract_company_cards(html, base_url=client.url or COMPANY_SEARCH_URL).items
        reporter.report(
            60, f"Found {len(companies)} companies", total=len(companies), processed=0
        )

        async for index, card in self._rate_limiter.paced(companies):
            try:
                await resolver.process_company(session_id, card)
            except FATAL_ITEM_ERRORS:
                raise
            except Exception as e:
                logger.warning("Skipping company %s: %s", card.name, e)

            done = index + 1
            reporter.report(
                60 + done / len(companies) * 35,
                f"Processed {done}/{len(companies)} companies",
                processed=done,
            )

    async def _crawl_friends_of_friends(
        self,
        session_id: UUID,
        client: LinkedInClient,
        resolver: EntityResolver,
        reporter: ProgressReporter,
    ) -> None:
        await client.goto(CONNECTIONS_URL)
        reporter.report(10, "Loading your connections")
        await client.scroll_to_load()

        html = await client.content()
        friends = extract_direct_connections(html, base_url=client.url or CONNECTIONS_URL).items
        targets = friends[: self._settings.max_connections]
        reporter.report(
            30,
            f"Found {len(friends)} direct connections, analyzing {len(targets)}",
            total=len(targets),
            processed=0,
        )

        async for index, friend in self._rate_limiter.paced(targets):
            try:
                await resolver.analyze_friend(session_id, friend)
            except FATAL_ITEM_ERRORS:
                raise
            except Exception as e:
                logger.warning("Failed to analyze %s: %s", friend.name, e)

            done = index + 1
            reporter.report(
                30 + done / len(targets) * 65,
                f"Analyzed {done}/{len(targets)} connections",
                processed=done,
            )
