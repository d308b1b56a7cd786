# ABOUTME: Control surface for creating, starting, cancelling and deleting crawl sessions.
# ABOUTME: Starts each crawl as an asyncio task tracked in the session registry.

import asyncio
import logging
from collections.abc import Callable
from uuid import UUID

from linkedin_networker.auth import LinkedInCredentials
from linkedin_networker.config import Settings
from linkedin_networker.crawl.orchestrator import CANCELLED_MESSAGE, CrawlOrchestrator
from linkedin_networker.crawl.registry import SessionRegistry
from linkedin_networker.database import DatabaseService, SessionNotFoundError, SessionStateError
from linkedin_networker.linkedin.client import LinkedInClient
from linkedin_networker.models import (
    CompanyConnectionResult,
    CrawlMode,
    CrawlSession,
    CrawlStatus,
)

logger = logging.getLogger(__name__)


class CrawlService:
    """Coordinates the session store, the orchestrator and running sessions.

    Handles the full session lifecycle:
    - Creating pending sessions
    - Starting a crawl in the background (fire-and-continue)
    - Cancelling a running crawl and deleting sessions with their rows
    - Reading sessions and their joined results
    """

    def __init__(
        self,
        db_service: DatabaseService,
        settings: Settings,
        registry: SessionRegistry | None = None,
        client_factory: Callable[[Settings], LinkedInClient] = LinkedInClient,
        orchestrator: CrawlOrchestrator | None = None,
    ) -> None:
        """Initialize the crawl service.

        Args:
            db_service: Session store.
            settings: Application settings handed to each client.
            registry: Running-session registry. Defaults to a new one.
            client_factory: Builds the browser client for each run.
            orchestrator: Runs the sessions. Defaults to one built from settings.
        """
        self._db_service = db_service
        self._settings = settings
        self._registry = registry if registry is not None else SessionRegistry()
        self._client_factory = client_factory
        self._orchestrator = (
            orchestrator if orchestrator is not None else CrawlOrchestrator(db_service, settings)
        )

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    def create_session(self, mode: CrawlMode) -> CrawlSession:
        """Create a pending session for the given mode."""
        crawl_session = self._db_service.create_crawl_session(mode)
        logger.info("Created %s session %s", mode.value, crawl_session.id)
        return crawl_session

    def start_session(
        self, session_id: UUID | str, credentials: LinkedInCredentials
    ) -> "asyncio.Task[CrawlStatus]":
        """Start a pending session in the background.

        Must be called from a running event loop.

        Returns:
            The task running the crawl; it resolves to the terminal status.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionStateError: If the session is not pending or already running.
        """
        crawl_session = self._require_session(session_id)
        if crawl_session.status != CrawlStatus.PENDING:
            raise SessionStateError(
                f"Crawl session '{crawl_session.id}' is {crawl_session.status.value}, "
                "only pending sessions can be started"
            )
        if crawl_session.id in self._registry:
            raise SessionStateError(f"Crawl session '{crawl_session.id}' is already running")

        client = self._client_factory(self._settings)
        self._registry.register(crawl_session.id, client)
        task = asyncio.create_task(
            self._run(crawl_session.id, credentials, client),
            name=f"crawl-{crawl_session.id}",
        )
        self._registry.attach_task(crawl_session.id, task)
        return task

    async def _run(
        self, session_id: UUID, credentials: LinkedInCredentials, client: LinkedInClient
    ) -> CrawlStatus:
        try:
            return await self._orchestrator.run(session_id, credentials, client)
        finally:
            self._registry.remove(session_id)

    def get_session(self, session_id: UUID | str) -> CrawlSession | None:
        return self._db_service.get_crawl_session(session_id)

    def list_sessions(self) -> list[CrawlSession]:
        return self._db_service.list_crawl_sessions()

    def get_results(
        self, session_id: UUID | str, search: str | None = None
    ) -> list[CompanyConnectionResult]:
        """Return a session's company-connection rows joined to both sides."""
        return self._db_service.get_company_connections(session_id, search=search)

    async def cancel_session(self, session_id: UUID | str) -> bool:
        """Cancel a session: mark it failed, close its browser and cancel its task.

        Returns:
            True if the session was running or still pending, False if it
            had already finished.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        crawl_session = self._require_session(session_id)
        cancelled = False
        if not crawl_session.is_terminal:
            self._db_service.update_crawl_session(
                crawl_session.id, status=CrawlStatus.FAILED, error=CANCELLED_MESSAGE
            )
            cancelled = True

        # A task cancelled before its first step never reaches _run's cleanup.
        entry = self._registry.remove(crawl_session.id)
        if entry is not None:
            logger.info("Cancelling crawl session %s", crawl_session.id)
            await entry.client.close()
            if entry.task is not None and not entry.task.done():
                entry.task.cancel()
            cancelled = True
        return cancelled

    async def delete_session(self, session_id: UUID | str) -> bool:
        """Delete a session with its connections and links, cancelling it first if running.

        Returns:
            True if a session was deleted, False if it did not exist.
        """
        crawl_session = self._db_service.get_crawl_session(session_id)
        if crawl_session is None:
            return False
        if crawl_session.id in self._registry:
            await self.cancel_session(crawl_session.id)
        return self._db_service.delete_crawl_session(crawl_session.id)

    async def shutdown(self) -> None:
        """Cancel every running session."""
        for session_id in self._registry.active_ids():
            await self.cancel_session(session_id)
        await self._registry.close_all()

    def _require_session(self, session_id: UUID | str) -> CrawlSession:
        crawl_session = self._db_service.get_crawl_session(session_id)
        if crawl_session is None:
            raise SessionNotFoundError(f"Crawl session '{session_id}' not found")
        return crawl_session
