# ABOUTME: LinkedIn URLs used by the crawler and predicates for classifying links.
# ABOUTME: Canonicalizes company URLs so they can serve as a dedupe key.

from urllib.parse import urljoin, urlsplit, urlunsplit

LINKEDIN_BASE_URL = "https://www.linkedin.com/"
CANONICAL_HOST = "www.linkedin.com"
LOGIN_URL = "https://www.linkedin.com/login"
COMPANY_SEARCH_URL = (
    "https://www.linkedin.com/search/results/companies/"
    "?network=%5B%22F%22%5D&origin=FACETED_SEARCH"
)
CONNECTIONS_URL = "https://www.linkedin.com/mynetwork/invite-connect/connections/"

ENTITY_PATH_PREFIXES = ("company", "school")
POST_PATH_MARKERS = ("/posts/", "/feed/update/", "/pulse/")


def absolute_url(href: str | None, base_url: str = LINKEDIN_BASE_URL) -> str:
    """Resolve an href against the page it was found on."""
    if not href:
        return ""
    return urljoin(base_url or LINKEDIN_BASE_URL, href.strip())


def _path_segments(url: str) -> list[str]:
    return [segment for segment in urlsplit(url).path.split("/") if segment]


def is_internal_url(url: str) -> bool:
    """Return True for http(s) links that stay on linkedin.com."""
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        return False
    host = parts.hostname or ""
    return host == "linkedin.com" or host.endswith(".linkedin.com")


def is_company_url(url: str) -> bool:
    """Return True for company or school page links."""
    segments = _path_segments(url)
    return is_internal_url(url) and len(segments) >= 2 and segments[0] in ENTITY_PATH_PREFIXES


def is_profile_url(url: str) -> bool:
    """Return True for personal profile links (/in/<slug>)."""
    segments = _path_segments(url)
    return is_internal_url(url) and len(segments) >= 2 and segments[0] == "in"


def is_post_url(url: str) -> bool:
    """Return True for feed posts and articles."""
    path = urlsplit(url).path
    return any(marker in path for marker in POST_PATH_MARKERS)


def is_people_search_url(url: str) -> bool:
    """Return True for person-search results pages."""
    return is_internal_url(url) and urlsplit(url).path.startswith("/search/results/people")


def strip_query(url: str) -> str:
    """Drop the query string and fragment from a URL."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def canonical_company_url(url: str) -> str:
    """Reduce a company or school link to https://www.linkedin.com/<kind>/<slug>/.

    The slug is lowercased, so links differing only in host or case share
    one key. Other links only lose their query string and fragment.
    """
    if not is_company_url(url):
        return strip_query(url)
    kind, slug = _path_segments(url)[:2]
    return urlunsplit(("https", CANONICAL_HOST, f"/{kind.lower()}/{slug.lower()}/", "", ""))
