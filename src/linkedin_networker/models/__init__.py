# ABOUTME: Models package for LinkedIn networker data structures.
# ABOUTME: Exports the crawl session, company, connection and junction SQLModels.

from linkedin_networker.models.company import Company
from linkedin_networker.models.company_connection import CompanyConnection, CompanyConnectionResult
from linkedin_networker.models.connection import Connection
from linkedin_networker.models.crawl_session import CrawlMode, CrawlSession, CrawlStatus

__all__ = [
    "Company",
    "CompanyConnection",
    "CompanyConnectionResult",
    "Connection",
    "CrawlMode",
    "CrawlSession",
    "CrawlStatus",
]
