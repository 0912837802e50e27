"""
Scrape orchestration.
Runs every configured source concurrently; within a source, candidates go
through the freshness filter and the classifier one at a time.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

import httpx

from classifier import classify_candidate
from freshness import is_fresh, start_of_today
from models import Event, SourceDescriptor
from scrapers import fetch_candidates
from scrapers.utils import excerpt

logger = logging.getLogger(__name__)


class SourceState(str, Enum):
    QUEUED = "queued"
    FETCHING = "fetching"
    PARSING = "parsing"
    FILTERING = "filtering"
    CLASSIFYING = "classifying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SourceRun:
    """Progress and outcome of one source within a scrape."""
    name: str
    state: SourceState = SourceState.QUEUED
    candidates: int = 0
    stale: int = 0
    classified: int = 0
    accepted: int = 0
    error: Optional[str] = None

    def advance(self, state: SourceState) -> None:
        logger.debug(f"[{self.name}] {self.state.value} -> {state.value}")
        self.state = state


@dataclass
class ScrapeResult:
    events: list[Event] = field(default_factory=list)
    runs: list[SourceRun] = field(default_factory=list)

    @property
    def failed(self) -> list[SourceRun]:
        return [run for run in self.runs if run.state == SourceState.FAILED]

    def summary(self) -> str:
        return (
            f"{len(self.events)} events accepted from {len(self.runs)} sources "
            f"({len(self.failed)} failed)"
        )


async def scrape_source(
    client: httpx.AsyncClient,
    source: SourceDescriptor,
    llm,
    today: date,
    eventbrite_token: Optional[str] = None,
) -> tuple[list[Event], SourceRun]:
    """Fetch one source and classify its fresh candidates in emission order."""
    run = SourceRun(name=source.name)
    events: list[Event] = []

    run.advance(SourceState.FETCHING)
    try:
        candidates = await fetch_candidates(client, source, eventbrite_token)
    except httpx.HTTPStatusError as e:
        run.error = f"HTTP {e.response.status_code}"
        run.advance(SourceState.FAILED)
        logger.error(
            f"[{source.name}] Fetch failed ({source.url or 'API'}): "
            f"status {e.response.status_code}, body {excerpt(e.response.text)}"
        )
        return events, run
    except Exception as e:
        run.error = f"{type(e).__name__}: {e}"
        run.advance(SourceState.FAILED)
        logger.error(f"[{source.name}] Fetch failed ({source.url or 'API'}): {run.error}")
        return events, run

    run.advance(SourceState.PARSING)
    run.candidates = len(candidates)

    run.advance(SourceState.FILTERING)
    for candidate in candidates:
        if not is_fresh(candidate, today):
            run.stale += 1
            logger.info(
                f"[Freshness] Dropped past event ({source.name}): "
                f"\"{candidate.name[:50]}\" (date: {candidate.rawDate})"
            )
            continue

        run.advance(SourceState.CLASSIFYING)
        forwarded = candidate.model_copy(update={"location": candidate.location or source.city})
        try:
            event = await classify_candidate(llm, forwarded)
        except Exception as e:
            logger.error(f"[{source.name}] Dropped \"{candidate.name[:50]}\": {type(e).__name__}: {e}")
            event = None
        run.classified += 1
        if event is None:
            logger.info(f"[Gemini] Rejected or not processed ({source.name}): \"{candidate.name[:50]}\"")
            continue

        events.append(event)
        run.accepted += 1

    run.advance(SourceState.DONE)
    logger.info(
        f"[{source.name}] Done: {run.candidates} candidates, {run.stale} stale, "
        f"{run.classified} classified, {run.accepted} accepted"
    )
    return events, run


async def run_scrape(
    client: httpx.AsyncClient,
    llm,
    sources: list[SourceDescriptor],
    eventbrite_token: Optional[str] = None,
    today: Optional[date] = None,
) -> ScrapeResult:
    """
    Scrape all sources concurrently and merge their accepted events.
    Completes once every source has settled; a failing source never affects its peers.
    """
    today = today or start_of_today()
    logger.info(f"Scraping {len(sources)} sources (today is {today.isoformat()})")

    tasks = [scrape_source(client, source, llm, today, eventbrite_token) for source in sources]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    result = ScrapeResult()
    for source, outcome in zip(sources, results):
        if isinstance(outcome, Exception):
            logger.error(f"[{source.name}] Unexpected error: {type(outcome).__name__}: {outcome}")
            result.runs.append(SourceRun(name=source.name, state=SourceState.FAILED, error=str(outcome)))
            continue
        events, run = outcome
        result.events.extend(events)
        result.runs.append(run)

    logger.info(f"Scrape finished: {result.summary()}")
    return result
