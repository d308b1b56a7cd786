# ABOUTME: Crawl package driving sessions through navigation, extraction and persistence.
# ABOUTME: Exports the orchestrator, the session registry and the CrawlService control surface.

from linkedin_networker.crawl.orchestrator import CANCELLED_MESSAGE, CrawlOrchestrator
from linkedin_networker.crawl.progress import ProgressReporter
from linkedin_networker.crawl.registry import ActiveCrawl, SessionRegistry
from linkedin_networker.crawl.service import CrawlService

__all__ = [
    "CANCELLED_MESSAGE",
    "ActiveCrawl",
    "CrawlOrchestrator",
    "CrawlService",
    "ProgressReporter",
    "SessionRegistry",
]
