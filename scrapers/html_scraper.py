"""
Generic HTML scraper for agenda/cartelera pages.
Looks for article-like cards and pulls a title, link, blurb and image from each.
"""
import logging

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from models import RawCandidate, SourceDescriptor
from scrapers.utils import HTTP_HEADERS, SCRAPE_TIMEOUT, resolve_url, truncate_description

logger = logging.getLogger(__name__)

CARD_SELECTOR = (
    "article, .evento, .event-item, .activity-card, .post-card, "
    ".card, .columna, .noticia-item, .item-list"
)
TITLE_SELECTOR = "h1, h2, h3, .title, .nombre-evento, .card-title, .entry-title"
DESCRIPTION_SELECTOR = "p, .description, .bajada, .card-text, .entry-summary"

# Title stems that mark news, announcements or navigation rather than events
JUNK_TITLE_STEMS = [
    "buscador bn",
    "ver más",
    "noticia",
    "comunicado",
    "balance municipal",
]


def is_junk(title: str, description: str) -> bool:
    """Coarse prefilter for cards that are obviously not events."""
    lowered = title.lower()
    if any(stem in lowered for stem in JUNK_TITLE_STEMS):
        return True
    return len(description) < 30 and len(title) < 20


def parse_html_candidates(html: str, base_url: str) -> list[RawCandidate]:
    """Extract candidates from every card-like node on the page."""
    soup = BeautifulSoup(html, "html.parser")
    candidates = []

    for node in soup.select(CARD_SELECTOR):
        try:
            title_el = node.select_one(TITLE_SELECTOR)
            title = title_el.get_text(strip=True) if title_el else ""

            link = title_el.find("a", href=True) if title_el else None
            if link is None:
                link = node.find("a", href=True)
            url = resolve_url(link.get("href") if link else None, base_url)

            desc_el = node.select_one(DESCRIPTION_SELECTOR)
            description = desc_el.get_text(strip=True) if desc_el else ""

            img = node.find("img", src=True)
            image_url = resolve_url(img.get("src") if img else None, base_url)

            if is_junk(title, description):
                continue

            if title and url:
                candidates.append(RawCandidate(
                    name=title,
                    description=truncate_description(description),
                    sourceUrl=url,
                    imageUrl=image_url,
                ))
        except (AttributeError, TypeError, ValueError, ValidationError) as e:
            logger.debug(f"Skipping malformed card on {base_url}: {type(e).__name__}: {e}")
            continue

    return candidates


async def fetch_html_candidates(client: httpx.AsyncClient, source: SourceDescriptor) -> list[RawCandidate]:
    """Fetch a page and extract its candidate cards. Transport errors propagate."""
    logger.info(f"[{source.name}] Fetching {source.url}")
    response = await client.get(source.url, headers=HTTP_HEADERS, follow_redirects=True, timeout=SCRAPE_TIMEOUT)
    response.raise_for_status()

    candidates = parse_html_candidates(response.text, str(response.url))
    logger.info(f"[{source.name}] Extracted {len(candidates)} raw candidates")
    return candidates
