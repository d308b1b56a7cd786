# ABOUTME: Text normalization and name-shape heuristics shared by the extractors.
# ABOUTME: Validates person names and recognizes connection-count phrasing.

import re

from bs4 import Tag

DESCRIPTION_MAX_LENGTH = 200

_NAME_TOKEN = r"[A-ZÀ-ÖØ-Þ][A-Za-zÀ-ÖØ-öø-ÿ'’.\-]*"
PERSON_NAME_RE = re.compile(rf"^{_NAME_TOKEN}(?:\s+{_NAME_TOKEN}){{1,3}}$")

# Words that show a candidate is interface text, not somebody's name.
NAME_STOP_WORDS = frozenset(
    {
        "linkedin",
        "view",
        "profile",
        "connection",
        "connections",
        "company",
        "member",
        "people",
        "search",
        "results",
        "status",
        "premium",
        "message",
        "follow",
        "see",
        "mutual",
    }
)

# "3 connections work here", "Jane and 2 other connections were hired here"
SUMMARY_LINK_RE = re.compile(
    r"\d+\s+(?:other\s+)?(?:connections?|people)\b.*\b(?:work|works|worked|hired)\b",
    re.IGNORECASE,
)
CONNECTION_COUNT_RE = re.compile(
    r"(\d+)\s+(?:other\s+)?(?:connections?|people)\b.*?\b(?:work|hired)",
    re.IGNORECASE,
)

# Keywords must start a word: "Networking" and "Hampshire" are not connection info.
CONNECTION_INFO_RE = re.compile(r"\b(?:connection|work|hire)", re.IGNORECASE)
NUMERIC_PERSON_RE = re.compile(r"\d+\s+(?:other\s+)?(?:people|persons?|members?)\b", re.IGNORECASE)

_DIRECT_NAME = r"([A-Z][a-z'’.\-]+(?:\s+[A-Z][a-z'’.\-]+)+)"
DIRECT_NAME_PATTERNS = (
    re.compile(rf"{_DIRECT_NAME}\s+works\s+here"),
    re.compile(rf"{_DIRECT_NAME}\s+were\s+hired\s+here"),
    re.compile(rf"{_DIRECT_NAME}\s+from\s+your"),
    re.compile(rf"{_DIRECT_NAME}\s+(?:and|works|were|from)\b"),
)
DIRECT_NAME_REJECT_WORDS = ("connection", "company", "people", "linkedin", "employee")


def clean_text(element: Tag | None) -> str:
    """Return an element's visible text with whitespace collapsed."""
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def attribute(element: Tag, name: str) -> str:
    """Return a single-valued attribute as a string, or an empty string."""
    value = element.get(name)
    return value.strip() if isinstance(value, str) else ""


def is_valid_person_name(text: str) -> bool:
    """Return True if text looks like a person's full name.

    The first token and one to three further tokens must be capitalized,
    the total length must be 4-79 characters, and no token may be a word
    from the interface vocabulary (View, Profile, LinkedIn, ...).
    """
    candidate = " ".join(text.split())
    if not 3 < len(candidate) < 80:
        return False
    if candidate[0].isdigit():
        return False
    if not PERSON_NAME_RE.match(candidate):
        return False
    tokens = {token.strip("'’.-").lower() for token in candidate.split()}
    return not tokens & NAME_STOP_WORDS


def is_connection_info(text: str) -> bool:
    """Return True for captions that talk about people in the user's network."""
    if CONNECTION_INFO_RE.search(text) is not None:
        return True
    return NUMERIC_PERSON_RE.search(text) is not None


def extract_direct_name(text: str) -> str | None:
    """Pull a literal person name out of connection-info text.

    Args:
        text: Caption such as "Jane Doe works here".

    Returns:
        The first name-shaped match without generic words, or None.
    """
    for pattern in DIRECT_NAME_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        name = match.group(1).strip()
        if any(word in name.lower() for word in DIRECT_NAME_REJECT_WORDS):
            continue
        return name
    return None


def clean_description(text: str, company_name: str) -> str | None:
    """Deduplicate '•'-separated phrases, drop the company name and truncate.

    Returns:
        The cleaned description, or None if nothing meaningful remains.
    """
    seen: set[str] = set()
    parts: list[str] = []
    for part in text.split("•"):
        phrase = " ".join(part.split())
        key = phrase.casefold()
        if not phrase or key == company_name.casefold() or key in seen:
            continue
        seen.add(key)
        parts.append(phrase)

    description = " • ".join(parts)
    if len(description) < 3:
        return None
    if len(description) > DESCRIPTION_MAX_LENGTH:
        description = description[:DESCRIPTION_MAX_LENGTH] + "..."
    return description
