# ABOUTME: Display module for Rich terminal output formatting.
# ABOUTME: Exports session and results tables plus error panels.

from linkedin_networker.display.errors import (
    display_crawl_failure,
    display_error,
    display_login_help,
)
from linkedin_networker.display.tables import ResultsTable, SessionTable

__all__ = [
    "ResultsTable",
    "SessionTable",
    "display_crawl_failure",
    "display_error",
    "display_login_help",
]
