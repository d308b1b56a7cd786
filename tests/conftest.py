# ABOUTME: Shared pytest fixtures for linkedin-networker tests.
# ABOUTME: Provides temp databases, fast settings, a page-serving fake client and sample pages.

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from linkedin_networker.auth import LinkedInCredentials
from linkedin_networker.config import Settings
from linkedin_networker.database import DatabaseService
from linkedin_networker.linkedin.exceptions import LinkedInTimeoutError
from linkedin_networker.linkedin.urls import COMPANY_SEARCH_URL, CONNECTIONS_URL

ACME_PEOPLE_URL = "https://www.linkedin.com/search/results/people/?currentCompany=1035"
ALICE_PROFILE_URL = "https://www.linkedin.com/in/alice-wong/"
BOB_PROFILE_URL = "https://www.linkedin.com/in/bob-stone/"

EMPTY_PAGE = "<html><head><title>LinkedIn</title></head><body></body></html>"


class FakeLinkedInClient:
    """Serves canned markup by URL in place of a real browser."""

    def __init__(
        self,
        pages: dict[str, str],
        login_error: Exception | None = None,
        failing_urls: tuple[str, ...] = (),
        content_error: Exception | None = None,
    ) -> None:
        self.pages = pages
        self.login_error = login_error
        self.failing_urls = failing_urls
        self.content_error = content_error
        self.visited: list[str] = []
        self.started = False
        self.closed = False
        self._url = ""

    @property
    def url(self) -> str:
        return self._url

    async def start(self) -> None:
        self.started = True

    async def login(self, credentials: LinkedInCredentials) -> None:
        if self.login_error is not None:
            raise self.login_error

    async def goto(self, url: str) -> None:
        self.visited.append(url)
        if url in self.failing_urls:
            raise LinkedInTimeoutError(f"Timeout 30000ms exceeded navigating to {url}")
        self._url = url

    async def scroll_to_load(self, iterations: int | None = None) -> None:
        return None

    async def content(self) -> str:
        if self.content_error is not None:
            raise self.content_error
        return self.pages.get(self._url, EMPTY_PAGE)

    async def close(self) -> None:
        self.closed = True


class BlockingLinkedInClient(FakeLinkedInClient):
    """A fake client whose login waits until released, for cancellation tests."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        super().__init__(pages or {})
        self.login_started = asyncio.Event()
        self.release = asyncio.Event()

    async def login(self, credentials: LinkedInCredentials) -> None:
        self.login_started.set()
        await self.release.wait()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Return a database path inside a per-test temporary directory."""
    return tmp_path / "test.db"


@pytest.fixture
def db_service(temp_db_path: Path) -> DatabaseService:
    """Create a DatabaseService instance with a temporary database."""
    service = DatabaseService(db_path=temp_db_path)
    service.init_db()
    return service


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with temporary paths and no scrolling pauses."""
    return Settings(
        db_path=tmp_path / "test.db",
        accounts_file=tmp_path / "accounts.json",
        rate_limit_ms=1000,
        scroll_iterations=1,
        scroll_wait_ms=0,
        page_settle_ms=0,
    )


@pytest.fixture
def no_sleep() -> AsyncMock:
    """A sleep replacement that returns immediately."""
    return AsyncMock()


@pytest.fixture
def credentials() -> LinkedInCredentials:
    return LinkedInCredentials(email="user@example.com", password="s3cret")


@pytest.fixture
def company_search_page() -> str:
    """Two company cards: one with a summary link, one with a plain count caption."""
    return """
    <html><head><title>Companies | Search | LinkedIn</title></head>
    <body><main><ul class="results">
      <li class="reusable-search__result-container">
        <div class="entity-result">
          <img src="https://media.licdn.com/dms/image/D560BAQ/company-logo_100_100/acme.png">
          <a data-test-app-aware-link href="https://www.linkedin.com/company/acme-corp/?trk=srp">
            <span aria-hidden="true">Acme Corp</span>
            <span class="visually-hidden">View Acme Corp</span>
          </a>
          <div class="entity-result__primary-subtitle">
            Software Development • San Francisco, CA • Software Development
          </div>
          <div class="entity-result__insights">
            <a href="/search/results/people/?currentCompany=1035">2 connections work here</a>
          </div>
        </div>
      </li>
      <li class="reusable-search__result-container">
        <div class="entity-result">
          <a data-test-app-aware-link href="https://www.linkedin.com/company/globex/">
            <span aria-hidden="true">Globex</span>
          </a>
          <div class="entity-result__primary-subtitle">Manufacturing</div>
          <div class="entity-result__insights">3 connections work here</div>
        </div>
      </li>
    </ul></main></body></html>
    """


@pytest.fixture
def people_search_page() -> str:
    """One person card behind Acme's summary link."""
    return """
    <html><head><title>People | Search | LinkedIn</title></head>
    <body><main><ul role="list">
      <li class="reusable-search__result-container">
        <a href="https://www.linkedin.com/in/jane-doe-123?miniProfileUrn=abc">
          <img src="https://media.licdn.com/dms/image/C4E03AQ/profile-displayphoto-shrink_100_100/0/1">
        </a>
        <span class="entity-result__title-text">
          <a href="https://www.linkedin.com/in/jane-doe-123?miniProfileUrn=abc">
            <span dir="ltr"><span aria-hidden="true">Jane Doe</span>
            <span class="visually-hidden">View Jane Doe’s profile</span></span>
          </a>
        </span>
        <div class="entity-result__primary-subtitle">Staff Engineer at Acme</div>
      </li>
    </ul></main></body></html>
    """


@pytest.fixture
def connections_page() -> str:
    """The connections list with two valid member cards and one without a link."""
    return f"""
    <html><head><title>Connections | LinkedIn</title></head><body>
      <div data-test-member-card>
        <a href="{ALICE_PROFILE_URL}"><span aria-hidden="true">Alice Wong</span></a>
        <p data-test-member-headline>Product Manager at Initech</p>
      </div>
      <div data-test-member-card>
        <a href="{BOB_PROFILE_URL}"><span aria-hidden="true">Bob Stone</span></a>
        <p data-test-member-headline>Designer</p>
      </div>
      <div data-test-member-card><span aria-hidden="true">No Link</span></div>
    </body></html>
    """


@pytest.fixture
def alice_profile_page() -> str:
    return """
    <html><body><section>
      <div data-test-experience-item>
        <a href="https://www.linkedin.com/company/initech/about/">
          <span aria-hidden="true">Initech</span>
        </a>
      </div>
    </section></body></html>
    """


@pytest.fixture
def first_connections_pages(company_search_page: str, people_search_page: str) -> dict[str, str]:
    return {
        COMPANY_SEARCH_URL: company_search_page,
        ACME_PEOPLE_URL: people_search_page,
    }


@pytest.fixture
def friends_pages(connections_page: str, alice_profile_page: str) -> dict[str, str]:
    return {
        CONNECTIONS_URL: connections_page,
        ALICE_PROFILE_URL: alice_profile_page,
    }
