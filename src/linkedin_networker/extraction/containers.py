# ABOUTME: Ranked container patterns that locate repeated result cards in a page.
# ABOUTME: Records per-pattern match counts and builds the diagnostic snapshot.

import logging
from collections.abc import Callable

from bs4 import BeautifulSoup, Tag

from linkedin_networker.extraction.models import ExtractionDiagnostics
from linkedin_networker.extraction.text import attribute
from linkedin_networker.linkedin.urls import (
    LINKEDIN_BASE_URL,
    absolute_url,
    is_internal_url,
    is_post_url,
    is_profile_url,
)

logger = logging.getLogger(__name__)

MARKUP_SAMPLE_LENGTH = 2000

ContainerStrategy = Callable[[BeautifulSoup, str], list[Tag]]


def _css(selector: str) -> ContainerStrategy:
    def strategy(soup: BeautifulSoup, base_url: str) -> list[Tag]:
        return soup.select(selector)

    return strategy


def _internal_non_profile_links(soup: BeautifulSoup, base_url: str) -> list[Tag]:
    links = []
    for anchor in soup.select("a[href]"):
        url = absolute_url(attribute(anchor, "href"), base_url)
        if is_internal_url(url) and not is_profile_url(url) and not is_post_url(url):
            links.append(anchor)
    return links


# Most specific known-stable markup first, generic fallbacks last.
CARD_CONTAINER_PATTERNS: tuple[tuple[str, ContainerStrategy], ...] = (
    ("result-container-attribute", _css("[data-test-result-container]")),
    ("reusable-search-result", _css("li.reusable-search__result-container")),
    ("chameleon-result", _css("div[data-chameleon-result-urn]")),
    ("entity-result-list", _css("ul.reusable-search__entity-result-list > li")),
    ("main-list-item", _css("main ul[role='list'] > li")),
    ("entity-result", _css("div.entity-result")),
    ("entity-result-class", _css("div[class*='entity-result']")),
    ("search-result-item", _css("li[class*='search-result']")),
    ("search-result-block", _css("div[class*='search-result']")),
    ("result-card", _css("div[class*='result-card']")),
    ("linked-heading", _css("h1:has(a), h2:has(a), h3:has(a), h4:has(a)")),
    ("entity-link", _css("a[href*='/company/'], a[href*='/school/']")),
    ("internal-link", _internal_non_profile_links),
)


def _outermost(elements: list[Tag]) -> list[Tag]:
    """Drop elements nested inside another matched element."""
    matched = {id(element) for element in elements}
    return [
        element
        for element in elements
        if not any(id(parent) in matched for parent in element.parents)
    ]


def find_cards(
    soup: BeautifulSoup, base_url: str = LINKEDIN_BASE_URL
) -> tuple[str | None, list[Tag], dict[str, int]]:
    """Locate result cards with the first container pattern that matches.

    Patterns are tried in rank order and the search stops at the first one
    matching at least one element; every element it matched is a card.

    Args:
        soup: Parsed document.
        base_url: URL the document was loaded from, for relative links.

    Returns:
        The winning pattern name (None if none matched), the cards, and the
        match count of every pattern that was tried.
    """
    counts: dict[str, int] = {}
    for name, strategy in CARD_CONTAINER_PATTERNS:
        elements = strategy(soup, base_url)
        counts[name] = len(elements)
        if elements:
            return name, _outermost(elements), counts
    return None, [], counts


def snapshot(
    soup: BeautifulSoup,
    strategy: str | None,
    pattern_counts: dict[str, int],
    skipped_cards: int = 0,
) -> ExtractionDiagnostics:
    """Capture the page title and a markup sample alongside the match counts."""
    title = clean_title(soup)
    body = soup.body if soup.body is not None else soup
    return ExtractionDiagnostics(
        strategy=strategy,
        pattern_counts=pattern_counts,
        page_title=title,
        markup_sample=str(body)[:MARKUP_SAMPLE_LENGTH],
        skipped_cards=skipped_cards,
    )


def clean_title(soup: BeautifulSoup) -> str | None:
    if soup.title is None:
        return None
    return " ".join(soup.title.get_text(" ").split()) or None


def log_no_match(kind: str, diagnostics: ExtractionDiagnostics) -> None:
    """Warn that no container pattern matched, with the diagnostic payload."""
    logger.warning(
        "No %s container pattern matched (title=%r, counts=%s)",
        kind,
        diagnostics.page_title,
        diagnostics.pattern_counts,
    )
    logger.debug("Markup sample: %s", diagnostics.markup_sample)
