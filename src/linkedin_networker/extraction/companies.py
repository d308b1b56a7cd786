# ABOUTME: Company-card extraction from the company search results page.
# ABOUTME: Applies the container cascade, then a per-card name/URL cascade and field probes.

import logging
from collections.abc import Callable
from functools import partial

from bs4 import BeautifulSoup, Tag

from linkedin_networker.extraction.cascade import first_success
from linkedin_networker.extraction.containers import find_cards, log_no_match, snapshot
from linkedin_networker.extraction.models import (
    CompanyCard,
    ConnectionCandidate,
    ExtractionResult,
)
from linkedin_networker.extraction.text import (
    SUMMARY_LINK_RE,
    attribute,
    clean_description,
    clean_text,
    extract_direct_name,
    is_connection_info,
)
from linkedin_networker.linkedin.urls import (
    LINKEDIN_BASE_URL,
    absolute_url,
    canonical_company_url,
    is_company_url,
    is_internal_url,
    is_people_search_url,
    is_post_url,
    is_profile_url,
)

logger = logging.getLogger(__name__)

NamedLink = tuple[str, str]

# Sub-elements that usually hold an entity's display name, best first.
NAME_HOLDER_SELECTORS = (
    "span[aria-hidden='true']",
    "span[class*='title']",
    "span[dir]",
    "span[class]",
    "span",
)

DESCRIPTION_SELECTORS = (
    "[data-test-entity-subtitle]",
    ".entity-result__primary-subtitle",
    "div[class*='primary-subtitle']",
    "div[class*='subtitle']",
    ".entity-result__summary",
    "p[class*='summary']",
    "p",
)

CONNECTION_INFO_SELECTORS = (
    "[data-test-entity-context]",
    ".entity-result__insights",
    "div[class*='insight']",
    "div[class*='caption']",
    "span[class*='caption']",
    "p[class*='caption']",
    "div[class*='secondary-subtitle']",
)

HEADING_TAGS = ("h1", "h2", "h3", "h4")


def _anchors(card: Tag) -> list[Tag]:
    """Return the card's links, including the card itself when it is a link."""
    anchors = card.select("a[href]")
    if card.name == "a" and card.get("href"):
        anchors.insert(0, card)
    return anchors


def _is_plain_internal(url: str) -> bool:
    return is_internal_url(url) and not is_profile_url(url) and not is_post_url(url)


def probe_name(anchor: Tag) -> str:
    """Return the first non-empty text among the ranked name holders."""
    for selector in NAME_HOLDER_SELECTORS:
        for element in anchor.select(selector):
            text = clean_text(element)
            if text:
                return text
    return clean_text(anchor)


def link_from_app_aware_anchor(card: Tag, base_url: str) -> NamedLink | None:
    """Primary strategy: the attribute-tagged result link and its hidden label."""
    anchor = card if card.has_attr("data-test-app-aware-link") else None
    if anchor is None:
        anchor = card.select_one("a[data-test-app-aware-link]")
    if anchor is None:
        return None
    name = clean_text(anchor.select_one("span[aria-hidden='true']"))
    url = absolute_url(attribute(anchor, "href"), base_url)
    if name and url and _is_plain_internal(url):
        return name, url
    return None


def link_from_entity_anchor(card: Tag, base_url: str) -> NamedLink | None:
    """Scan every link for a company or school target and probe its name holders."""
    for anchor in _anchors(card):
        url = absolute_url(attribute(anchor, "href"), base_url)
        if not is_company_url(url):
            continue
        name = probe_name(anchor)
        if name:
            return name, url
    return None


def link_from_heading(card: Tag, base_url: str) -> NamedLink | None:
    """Fall back to a heading that contains a link."""
    headings = [card] if card.name in HEADING_TAGS else []
    headings.extend(card.select(", ".join(HEADING_TAGS)))
    for heading in headings:
        for anchor in heading.select("a[href]"):
            url = absolute_url(attribute(anchor, "href"), base_url)
            name = clean_text(anchor)
            if name and _is_plain_internal(url):
                return name, url
    return None


def link_from_internal_anchor(card: Tag, base_url: str) -> NamedLink | None:
    """Last resort: any internal link that is not a profile or a post."""
    for anchor in _anchors(card):
        url = absolute_url(attribute(anchor, "href"), base_url)
        name = clean_text(anchor)
        if name and _is_plain_internal(url):
            return name, url
    return None


CARD_LINK_STRATEGIES: tuple[tuple[str, Callable[[Tag, str], NamedLink | None]], ...] = (
    ("app-aware-link", link_from_app_aware_anchor),
    ("entity-anchor", link_from_entity_anchor),
    ("heading-link", link_from_heading),
    ("internal-link", link_from_internal_anchor),
)


def find_card_link(card: Tag, base_url: str = LINKEDIN_BASE_URL) -> tuple[str, NamedLink] | None:
    """Resolve a card's (name, URL) pair with the first strategy that succeeds."""
    strategies = [
        (name, partial(strategy, base_url=base_url)) for name, strategy in CARD_LINK_STRATEGIES
    ]
    return first_success(strategies, card)


def find_logo(card: Tag, base_url: str) -> str | None:
    image = card.select_one("img")
    if image is None:
        return None
    src = attribute(image, "src") or attribute(image, "data-delayed-url")
    return absolute_url(src, base_url) or None


def find_description(card: Tag, company_name: str) -> str | None:
    """Return the first meaningful subtitle-like text of the card."""
    for selector in DESCRIPTION_SELECTORS:
        for element in card.select(selector):
            description = clean_description(clean_text(element), company_name)
            if description:
                return description
    return None


def find_connection_info(card: Tag) -> str | None:
    """Return the first caption that talks about connections or hires."""
    for selector in CONNECTION_INFO_SELECTORS:
        for element in card.select(selector):
            text = clean_text(element)
            if text and is_connection_info(text):
                return text
    return None


def find_summary_links(card: Tag, base_url: str) -> list[ConnectionCandidate]:
    """Collect 'N connections work here' links that lead to a people search."""
    placeholders: list[ConnectionCandidate] = []
    seen: set[str] = set()
    for anchor in _anchors(card):
        text = clean_text(anchor)
        url = absolute_url(attribute(anchor, "href"), base_url)
        if not SUMMARY_LINK_RE.search(text) or not is_people_search_url(url):
            continue
        if url in seen:
            continue
        seen.add(url)
        placeholders.append(
            ConnectionCandidate(name=text, search_url=url, needs_resolution=True)
        )
    return placeholders


def parse_company_card(card: Tag, base_url: str = LINKEDIN_BASE_URL) -> CompanyCard | None:
    """Turn one card into a CompanyCard, or None if it has no name and URL."""
    found = find_card_link(card, base_url)
    if found is None:
        return None
    strategy, (name, url) = found

    connection_info = find_connection_info(card)
    connections = find_summary_links(card, base_url)
    if not connections and connection_info:
        direct_name = extract_direct_name(connection_info)
        if direct_name:
            connections = [ConnectionCandidate(name=direct_name, headline=connection_info)]

    return CompanyCard(
        name=name,
        linkedin_url=canonical_company_url(url),
        logo_url=find_logo(card, base_url),
        description=find_description(card, name),
        connection_info=connection_info,
        connections=connections,
        link_strategy=strategy,
    )


def extract_company_cards(
    html: str, base_url: str = LINKEDIN_BASE_URL
) -> ExtractionResult[CompanyCard]:
    """Extract company cards from a company search results document.

    Never raises for a single malformed card: the card is logged and
    skipped. When no container pattern matches, the result is empty and
    carries a diagnostic snapshot.

    Args:
        html: Serialized document markup.
        base_url: URL the document was loaded from.

    Returns:
        Company cards deduplicated by canonical URL, plus diagnostics.
    """
    soup = BeautifulSoup(html, "lxml")
    strategy, cards, counts = find_cards(soup, base_url)

    companies: list[CompanyCard] = []
    seen_urls: set[str] = set()
    skipped = 0
    for index, card in enumerate(cards):
        try:
            company = parse_company_card(card, base_url)
        except Exception as e:
            logger.debug("Skipping company card %d: %s", index, e)
            skipped += 1
            continue
        if company is None:
            skipped += 1
            continue
        if company.linkedin_url in seen_urls:
            continue
        seen_urls.add(company.linkedin_url)
        companies.append(company)

    diagnostics = snapshot(soup, strategy, counts, skipped)
    if strategy is None:
        log_no_match("company card", diagnostics)
    else:
        logger.info(
            "Extracted %d companies from %d cards using %s", len(companies), len(cards), strategy
        )
    return ExtractionResult[CompanyCard](items=companies, diagnostics=diagnostics)
