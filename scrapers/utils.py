"""Shared helpers for the source fetchers."""
from typing import Optional
from urllib.parse import urljoin

# HTTP headers for web requests
HTTP_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "es-CL,es;q=0.9,en;q=0.5",
}

SCRAPE_TIMEOUT = 10.0  # seconds, HTML and RSS sources
API_TIMEOUT = 15.0  # seconds, Eventbrite API

MAX_DESCRIPTION_LENGTH = 500


def resolve_url(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve a possibly relative href against the page URL."""
    if not href:
        return None
    href = href.strip()
    if href.startswith("http"):
        return href
    return urljoin(base_url, href)


def truncate_description(text: Optional[str]) -> str:
    """Cut raw descriptions to a size worth sending to the LLM."""
    if not text:
        return ""
    return text[:MAX_DESCRIPTION_LENGTH] + "..."


def excerpt(text: str, limit: int = 200) -> str:
    """Short single-line preview for logs."""
    text = " ".join(text.split())
    return text if len(text) <= limit else text[:limit] + "..."
