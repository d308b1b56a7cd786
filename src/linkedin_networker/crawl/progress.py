# ABOUTME: Progress reporting for a running crawl session.
# ABOUTME: Writes monotonically increasing checkpoints to the session row.

import logging
from uuid import UUID

from linkedin_networker.database import DatabaseService

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Writes progress checkpoints for one session.

    Consumers poll the session row, so every checkpoint is persisted. A
    checkpoint lower than the previous one is raised to it.
    """

    def __init__(self, db_service: DatabaseService, session_id: UUID) -> None:
        self._db_service = db_service
        self._session_id = session_id
        self._last = 0

    def report(
        self,
        progress: float,
        message: str,
        *,
        total: int | None = None,
        processed: int | None = None,
    ) -> int:
        """Persist a checkpoint and return the stored value.

        Args:
            progress: Percent complete; truncated to an integer and clamped.
            message: Human-readable checkpoint description, logged only.
            total: Number of items the crawl expects to process.
            processed: Number of items processed so far.
        """
        value = max(self._last, min(100, int(progress)))
        self._db_service.update_crawl_session(
            self._session_id,
            progress=value,
            total_connections=total,
            processed_connections=processed,
        )
        self._last = value
        logger.info("[%s] %d%% %s", str(self._session_id)[:8], value, message)
        return value
