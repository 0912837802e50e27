# Source fetchers, one per source kind
from typing import Optional

import httpx

from models import RawCandidate, SourceDescriptor
from .eventbrite_api import fetch_eventbrite_candidates, parse_eventbrite_events
from .html_scraper import fetch_html_candidates, parse_html_candidates
from .rss_scraper import fetch_rss_candidates, parse_rss_candidates


async def fetch_candidates(
    client: httpx.AsyncClient,
    source: SourceDescriptor,
    eventbrite_token: Optional[str] = None,
) -> list[RawCandidate]:
    """Dispatch a source to the fetcher for its kind."""
    if source.kind == "html":
        return await fetch_html_candidates(client, source)
    elif source.kind == "rss":
        return await fetch_rss_candidates(client, source)
    elif source.kind == "api":
        return await fetch_eventbrite_candidates(client, source, eventbrite_token)
    raise ValueError(f"Unknown source kind: {source.kind}")


__all__ = [
    'fetch_candidates',
    'fetch_html_candidates', 'parse_html_candidates',
    'fetch_rss_candidates', 'parse_rss_candidates',
    'fetch_eventbrite_candidates', 'parse_eventbrite_events',
]
