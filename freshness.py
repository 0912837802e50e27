"""Date-based freshness filter applied before any LLM call."""
import logging
from datetime import date, datetime
from typing import Optional

from dateutil import parser as date_parser

from models import RawCandidate

logger = logging.getLogger(__name__)


def start_of_today(now: Optional[datetime] = None) -> date:
    """Local calendar date; captured once per scrape run."""
    return (now or datetime.now()).date()


def parse_raw_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse a free-form date string (RFC 822 pubDate, ISO 8601, ...) to a local date.
    Returns None when the value is absent or cannot be parsed.
    """
    if not raw or not raw.strip():
        return None
    try:
        parsed = date_parser.parse(raw)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError):
        return None
    return parsed.date()


def is_fresh(candidate: RawCandidate, today: date) -> bool:
    """Candidates without a usable date pass; dated ones must not be before today."""
    event_date = parse_raw_date(candidate.rawDate)
    if event_date is None:
        return True
    return event_date >= today
