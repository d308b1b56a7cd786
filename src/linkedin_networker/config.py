# ABOUTME: Configuration module for application and crawl settings.
# ABOUTME: Uses pydantic-settings for environment variable overrides and provides cached access.

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_RATE_LIMIT_MS = 1000


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the
    LINKEDIN_NETWORKER_ prefix (e.g., LINKEDIN_NETWORKER_RATE_LIMIT_MS).
    """

    model_config = SettingsConfigDict(
        env_prefix="LINKEDIN_NETWORKER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    db_path: Annotated[Path, Field(description="Path to SQLite database file")] = (
        Path.home() / ".linkedin-networker" / "linkedin-networker.db"
    )

    accounts_file: Annotated[Path, Field(description="Path to accounts JSON file")] = (
        Path.home() / ".linkedin-networker" / "accounts.json"
    )

    rate_limit_ms: Annotated[
        int, Field(description="Delay between crawled items in milliseconds", ge=0)
    ] = 2500

    max_connections: Annotated[
        int, Field(description="Maximum connections analyzed in friends-of-friends mode", ge=1)
    ] = 50

    headless: Annotated[bool, Field(description="Run the browser without a visible window")] = (
        True
    )

    scroll_iterations: Annotated[
        int, Field(description="Scroll-and-wait iterations used to load lazy results", ge=0)
    ] = 5

    scroll_wait_ms: Annotated[
        int, Field(description="Pause after each scroll iteration in milliseconds", ge=0)
    ] = 2000

    page_settle_ms: Annotated[
        int, Field(description="Pause after each navigation in milliseconds", ge=0)
    ] = 3000

    navigation_timeout_ms: Annotated[
        int, Field(description="Navigation timeout in milliseconds", ge=10000, le=60000)
    ] = 30000

    selector_timeout_ms: Annotated[
        int, Field(description="Selector wait timeout in milliseconds", ge=1000, le=60000)
    ] = 10000

    launch_timeout_ms: Annotated[
        int, Field(description="Browser launch timeout in milliseconds", ge=10000)
    ] = 60000

    poll_interval_seconds: Annotated[
        float, Field(description="How often the CLI polls a running session", gt=0)
    ] = 3.0

    log_level: Annotated[str, Field(description="Root log level")] = "INFO"

    tos_accepted: Annotated[bool, Field(description="Whether Terms of Service was accepted")] = (
        False
    )

    @property
    def effective_rate_limit_ms(self) -> int:
        """Return the inter-item delay, never below one second."""
        return max(self.rate_limit_ms, MIN_RATE_LIMIT_MS)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings.

    Returns a cached Settings instance. Use get_settings.cache_clear()
    to clear the cache if needed.

    Returns:
        Cached Settings instance.
    """
    return Settings()

