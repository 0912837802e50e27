"""RSS feed scraper."""
import logging
from typing import Optional

import feedparser
import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from models import RawCandidate, SourceDescriptor
from scrapers.utils import HTTP_HEADERS, SCRAPE_TIMEOUT, truncate_description

logger = logging.getLogger(__name__)


def strip_tags(html: str) -> str:
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def first_image(html: str) -> Optional[str]:
    """First <img src> of an HTML fragment, if any."""
    img = BeautifulSoup(html, "html.parser").find("img", src=True)
    return img["src"] if img else None


def parse_rss_candidates(xml_text: str) -> list[RawCandidate]:
    """Turn every feed item with a title and a link into a candidate."""
    feed = feedparser.parse(xml_text)
    if feed.bozo and not feed.entries:
        logger.warning(f"Feed could not be parsed: {feed.get('bozo_exception')}")
        return []

    candidates = []
    for entry in feed.entries:
        try:
            title = entry.get("title", "").strip()
            link = entry.get("link", "").strip()
            if not title or not link:
                continue

            image_url = None
            # content:encoded lands in entry.content
            if entry.get("content"):
                image_url = first_image(entry.content[0].get("value", ""))

            candidates.append(RawCandidate(
                name=title,
                description=truncate_description(strip_tags(entry.get("summary", ""))),
                sourceUrl=link,
                imageUrl=image_url,
                rawDate=entry.get("published"),
            ))
        except (AttributeError, IndexError, TypeError, ValueError, ValidationError) as e:
            logger.debug(f"Skipping malformed feed item: {type(e).__name__}: {e}")
            continue

    return candidates


async def fetch_rss_candidates(client: httpx.AsyncClient, source: SourceDescriptor) -> list[RawCandidate]:
    """Fetch a feed and extract its items. Transport errors propagate."""
    logger.info(f"[{source.name}] Fetching feed {source.url}")
    response = await client.get(source.url, headers=HTTP_HEADERS, follow_redirects=True, timeout=SCRAPE_TIMEOUT)
    response.raise_for_status()

    candidates = parse_rss_candidates(response.text)
    logger.info(f"[{source.name}] Extracted {len(candidates)} raw candidates")
    return candidates
