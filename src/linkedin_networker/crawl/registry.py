# ABOUTME: Process-wide registry of crawl sessions that are currently running.
# ABOUTME: Maps session IDs to their browser client and asyncio task.

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from linkedin_networker.linkedin.client import LinkedInClient
from linkedin_networker.models import CrawlStatus

logger = logging.getLogger(__name__)


@dataclass
class ActiveCrawl:
    """Handles owned by one running session."""

    client: LinkedInClient
    task: "asyncio.Task[CrawlStatus] | None" = None


class SessionRegistry:
    """Tracks running sessions for the lifetime of the process.

    There is no lock against starting two sessions at once; the registry
    only makes each session's handles reachable for cancellation.
    """

    def __init__(self) -> None:
        self._active: dict[UUID, ActiveCrawl] = {}

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._active

    def __len__(self) -> int:
        return len(self._active)

    def register(self, session_id: UUID, client: LinkedInClient) -> ActiveCrawl:
        """Record a session's client before its task starts."""
        entry = ActiveCrawl(client=client)
        self._active[session_id] = entry
        return entry

    def attach_task(self, session_id: UUID, task: "asyncio.Task[CrawlStatus]") -> None:
        """Attach the running task to a registered session."""
        entry = self._active.get(session_id)
        if entry is not None:
            entry.task = task

    def get(self, session_id: UUID) -> ActiveCrawl | None:
        return self._active.get(session_id)

    def remove(self, session_id: UUID) -> ActiveCrawl | None:
        return self._active.pop(session_id, None)

    def active_ids(self) -> list[UUID]:
        """Return the IDs of every running session."""
        return list(self._active)

    async def close_all(self) -> None:
        """Close every client and cancel every unfinished task."""
        entries = list(self._active.items())
        self._active.clear()
        for session_id, entry in entries:
            logger.info("Stopping crawl session %s", session_id)
            await entry.client.close()
            if entry.task is not None and not entry.task.done():
                entry.task.cancel()
