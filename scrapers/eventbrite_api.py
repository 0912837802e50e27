"""
Eventbrite search API fetcher.
Pages through free events for the source's city, up to MAX_EVENTBRITE_PAGES.
"""
import logging
from typing import Optional

import httpx
from dateutil import parser as date_parser
from pydantic import ValidationError

from models import RawCandidate, SourceDescriptor
from scrapers.utils import API_TIMEOUT, excerpt

logger = logging.getLogger(__name__)

EVENTBRITE_SEARCH_URL = "https://www.eventbriteapi.com/v3/events/search/"
MAX_EVENTBRITE_PAGES = 5  # Heuristic cap, not derived from any quota
PAGE_SIZE = 50
DEFAULT_LOCATION = "Online o por confirmar"

API_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "Accept": "application/json",
}


def _to_iso(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        return date_parser.isoparse(value).isoformat()
    except ValueError:
        return value


def parse_eventbrite_events(payload: dict) -> list[RawCandidate]:
    """Extract candidates from one search response page."""
    event_list = payload.get("events")
    if event_list is None and isinstance(payload.get("data"), dict):
        event_list = payload["data"].get("events")

    if not isinstance(event_list, list):
        logger.warning(f"Eventbrite response has no 'events' array: {excerpt(str(payload))}")
        return []

    candidates = []
    for event in event_list:
        try:
            name = (event.get("name") or {}).get("text") or ""
            description = event.get("summary") or (event.get("description") or {}).get("text") or ""
            logo = event.get("logo") or {}
            image_url = (logo.get("original") or {}).get("url")
            source_url = event.get("url") or ""
            venue_address = (event.get("venue") or {}).get("address") or {}
            location = venue_address.get("localized_address_display") or DEFAULT_LOCATION
            raw_date = _to_iso((event.get("start") or {}).get("local"))

            if name and source_url:
                candidates.append(RawCandidate(
                    name=name,
                    description=description,
                    sourceUrl=source_url,
                    imageUrl=image_url,
                    location=location,
                    rawDate=raw_date,
                ))
        except (AttributeError, TypeError, ValidationError) as e:
            logger.error(f"Error processing an Eventbrite event: {type(e).__name__}: {e}")
            continue

    return candidates


async def fetch_eventbrite_candidates(
    client: httpx.AsyncClient,
    source: SourceDescriptor,
    token: Optional[str],
) -> list[RawCandidate]:
    """
    Collect candidates across result pages.

    Pagination stops when the API reports no more items, at the page cap,
    or on the first page that fails; pages already fetched are kept.
    """
    if not token:
        logger.error(f"[{source.name}] EVENTBRITE_API_TOKEN is not configured, skipping source")
        return []

    candidates: list[RawCandidate] = []
    page = 1
    while page <= MAX_EVENTBRITE_PAGES:
        params = {
            "location.address": f"{source.city}, Chile",
            "price": "free",
            "page_size": PAGE_SIZE,
            "page": page,
            "token": token,
        }
        logger.info(f"[{source.name}] Searching {source.city} (page {page})")
        try:
            response = await client.get(EVENTBRITE_SEARCH_URL, params=params, headers=API_HEADERS, timeout=API_TIMEOUT)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"[{source.name}] API error for {source.city} (page {page}): "
                f"status {e.response.status_code}, body {excerpt(e.response.text)}"
            )
            break
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"[{source.name}] API call failed for {source.city} (page {page}): {type(e).__name__}: {e}")
            break

        if not isinstance(payload, dict):
            logger.error(f"[{source.name}] Unexpected API payload on page {page}: {excerpt(str(payload))}")
            break

        page_candidates = parse_eventbrite_events(payload)
        candidates.extend(page_candidates)
        logger.info(f"[{source.name}] Page {page} yielded {len(page_candidates)} items, {len(candidates)} so far")

        if not (payload.get("pagination") or {}).get("has_more_items"):
            break
        page += 1

    logger.info(f"[{source.name}] Pagination finished with {len(candidates)} raw candidates")
    return candidates
