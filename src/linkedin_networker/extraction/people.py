# ABOUTME: Person-card extraction for people search pages and the connections list.
# ABOUTME: Also reads the current employer from a profile's experience block.

import logging
import re

from bs4 import BeautifulSoup, Tag

from linkedin_networker.extraction.containers import find_cards, log_no_match, snapshot
from linkedin_networker.extraction.models import (
    ConnectionCandidate,
    CurrentCompany,
    DirectConnection,
    ExtractionResult,
)
from linkedin_networker.extraction.text import attribute, clean_text, is_valid_person_name
from linkedin_networker.linkedin.urls import (
    LINKEDIN_BASE_URL,
    absolute_url,
    canonical_company_url,
    is_company_url,
    is_profile_url,
    strip_query,
)

logger = logging.getLogger(__name__)

PERSON_NAME_SELECTORS = (
    "span[aria-hidden='true']",
    "span[dir='ltr'] span",
    "span[class*='title']",
    "span[class*='name']",
    "span",
)

HEADLINE_SELECTORS = (
    ".entity-result__primary-subtitle",
    "div[class*='primary-subtitle']",
    "div[class*='subtitle']",
)

PROFILE_PHOTO_RE = re.compile(r"profile-displayphoto|profile-framedphoto|/dms/image/\S*profile")

MEMBER_CARD_SELECTOR = "[data-test-member-card]"
EXPERIENCE_ITEM_SELECTOR = "[data-test-experience-item]"


def _profile_anchors(card: Tag, base_url: str) -> list[tuple[Tag, str]]:
    anchors = card.select("a[href]")
    if card.name == "a" and card.get("href"):
        anchors.insert(0, card)
    found = []
    for anchor in anchors:
        url = absolute_url(attribute(anchor, "href"), base_url)
        if is_profile_url(url):
            found.append((anchor, strip_query(url)))
    return found


def probe_person_name(anchor: Tag) -> str | None:
    """Return the first candidate text under the anchor that is name-shaped."""
    for selector in PERSON_NAME_SELECTORS:
        for element in anchor.select(selector):
            text = clean_text(element)
            if text and is_valid_person_name(text):
                return text
    text = clean_text(anchor)
    return text if is_valid_person_name(text) else None


def find_profile_image(card: Tag, base_url: str) -> str | None:
    for image in card.select("img"):
        src = attribute(image, "src")
        if src and PROFILE_PHOTO_RE.search(src):
            return absolute_url(src, base_url)
    return None


def parse_person_card(card: Tag, base_url: str = LINKEDIN_BASE_URL) -> ConnectionCandidate | None:
    """Return the card's one accepted person, or None if no name validates."""
    for anchor, url in _profile_anchors(card, base_url):
        name = probe_person_name(anchor)
        if name is None:
            continue
        headline = None
        for selector in HEADLINE_SELECTORS:
            headline = clean_text(card.select_one(selector)) or None
            if headline:
                break
        return ConnectionCandidate(
            name=name,
            profile_url=url,
            profile_image_url=find_profile_image(card, base_url),
            headline=headline,
        )
    return None


def extract_person_cards(
    html: str, base_url: str = LINKEDIN_BASE_URL
) -> ExtractionResult[ConnectionCandidate]:
    """Extract named people from a person-search results document.

    Uses the same ranked container patterns as company extraction and takes
    at most one accepted name per card.

    Args:
        html: Serialized document markup.
        base_url: URL the document was loaded from.

    Returns:
        People deduplicated by profile URL, plus diagnostics.
    """
    soup = BeautifulSoup(html, "lxml")
    strategy, cards, counts = find_cards(soup, base_url)

    people: list[ConnectionCandidate] = []
    seen: set[str] = set()
    skipped = 0
    for index, card in enumerate(cards):
        try:
            person = parse_person_card(card, base_url)
        except Exception as e:
            logger.debug("Skipping person card %d: %s", index, e)
            skipped += 1
            continue
        if person is None:
            skipped += 1
            continue
        key = person.profile_url or person.name
        if key in seen:
            continue
        seen.add(key)
        people.append(person)

    diagnostics = snapshot(soup, strategy, counts, skipped)
    if strategy is None:
        log_no_match("person card", diagnostics)
    return ExtractionResult[ConnectionCandidate](items=people, diagnostics=diagnostics)


def extract_direct_connections(
    html: str, base_url: str = LINKEDIN_BASE_URL
) -> ExtractionResult[DirectConnection]:
    """Extract the member cards on the user's connections list.

    Cards without a name or a profile URL are skipped.
    """
    soup = BeautifulSoup(html, "lxml")
    cards = soup.select(MEMBER_CARD_SELECTOR)

    connections: list[DirectConnection] = []
    skipped = 0
    for index, card in enumerate(cards):
        try:
            name = clean_text(card.select_one('a span[aria-hidden="true"]'))
            link = card.select_one("a")
            url = absolute_url(attribute(link, "href"), base_url) if link is not None else ""
            if not name or not url:
                skipped += 1
                continue
            headline = clean_text(card.select_one("[data-test-member-headline]")) or None
            connections.append(
                DirectConnection(name=name, profile_url=strip_query(url), headline=headline)
            )
        except Exception as e:
            logger.debug("Skipping member card %d: %s", index, e)
            skipped += 1

    strategy = "member-card" if cards else None
    diagnostics = snapshot(soup, strategy, {"member-card": len(cards)}, skipped)
    if not cards:
        log_no_match("member card", diagnostics)
    return ExtractionResult[DirectConnection](items=connections, diagnostics=diagnostics)


def extract_current_company(
    html: str, base_url: str = LINKEDIN_BASE_URL
) -> CurrentCompany | None:
    """Read the employer from the first current-experience block of a profile.

    Returns:
        The company name and canonical URL (None when the link is not a
        company page), or None when the block or its name is missing.
    """
    soup = BeautifulSoup(html, "lxml")
    item = soup.select_one(EXPERIENCE_ITEM_SELECTOR)
    if item is None:
        return None

    name = clean_text(item.select_one('a span[aria-hidden="true"]'))
    if not name:
        return None

    link = item.select_one("a")
    url = absolute_url(attribute(link, "href"), base_url) if link is not None else ""
    return CurrentCompany(
        name=name,
        linkedin_url=canonical_company_url(url) if is_company_url(url) else None,
    )
