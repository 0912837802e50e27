import httpx
import pytest

from conftest import make_client
from models import SourceDescriptor
from scrapers.eventbrite_api import (
    DEFAULT_LOCATION,
    MAX_EVENTBRITE_PAGES,
    fetch_eventbrite_candidates,
    parse_eventbrite_events,
)

SOURCE = SourceDescriptor(name="Eventbrite (API)", kind="api", city="Santiago")


def eventbrite_event(n: int = 1) -> dict:
    return {
        "name": {"text": "Taller de huerto"},
        "summary": "Aprende a cultivar en casa.",
        "description": {"text": "Descripción larga"},
        "url": f"https://ev/{n}",
        "logo": {"original": {"url": f"https://img/{n}"}},
        "venue": {"address": {"localized_address_display": "Parque X, Santiago"}},
        "start": {"local": "2099-01-15T10:00:00"},
    }


def page(events: list, has_more: bool) -> dict:
    return {"events": events, "pagination": {"has_more_items": has_more}}


def test_parse_event_fields():
    candidates = parse_eventbrite_events(page([eventbrite_event()], False))

    assert len(candidates) == 1
    c = candidates[0]
    assert c.name == "Taller de huerto"
    assert c.description == "Aprende a cultivar en casa."
    assert c.sourceUrl == "https://ev/1"
    assert c.imageUrl == "https://img/1"
    assert c.location == "Parque X, Santiago"
    assert c.rawDate == "2099-01-15T10:00:00"


def test_parse_fallbacks_and_skips():
    no_venue = {
        "name": {"text": "Charla online"},
        "description": {"text": "Sólo descripción"},
        "url": "https://ev/2",
        "logo": None,
        "venue": None,
        "start": {},
    }
    nameless = {"name": {"text": ""}, "url": "https://ev/3"}
    payload = {"data": {"events": [no_venue, nameless]}}

    candidates = parse_eventbrite_events(payload)

    assert len(candidates) == 1
    c = candidates[0]
    assert c.description == "Sólo descripción"
    assert c.location == DEFAULT_LOCATION
    assert c.imageUrl is None
    assert c.rawDate is None


def test_parse_without_events_array():
    assert parse_eventbrite_events({"error": "nope"}) == []


@pytest.mark.asyncio
async def test_pagination_stops_at_page_cap():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        n = int(request.url.params["page"])
        return httpx.Response(200, json=page([eventbrite_event(n)], True))

    async with make_client(handler) as client:
        candidates = await fetch_eventbrite_candidates(client, SOURCE, "tok")

    assert len(requests) == MAX_EVENTBRITE_PAGES == 5
    assert [c.sourceUrl for c in candidates] == [f"https://ev/{n}" for n in range(1, 6)]

    params = requests[0].url.params
    assert params["location.address"] == "Santiago, Chile"
    assert params["price"] == "free"
    assert params["page_size"] == "50"
    assert params["token"] == "tok"
    assert requests[0].headers["Accept"] == "application/json"
    assert requests[0].headers["User-Agent"]


@pytest.mark.asyncio
async def test_pagination_stops_when_no_more_items():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        n = int(request.url.params["page"])
        return httpx.Response(200, json=page([eventbrite_event(n)], n < 2))

    async with make_client(handler) as client:
        candidates = await fetch_eventbrite_candidates(client, SOURCE, "tok")

    assert len(requests) == 2
    assert len(candidates) == 2


@pytest.mark.asyncio
async def test_page_error_keeps_earlier_pages():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        n = int(request.url.params["page"])
        if n == 2:
            return httpx.Response(500, json={"error": "INTERNAL_ERROR"})
        return httpx.Response(200, json=page([eventbrite_event(n)], True))

    async with make_client(handler) as client:
        candidates = await fetch_eventbrite_candidates(client, SOURCE, "tok")

    assert len(requests) == 2
    assert [c.sourceUrl for c in candidates] == ["https://ev/1"]


@pytest.mark.asyncio
async def test_invalid_json_stops_pagination():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    async with make_client(handler) as client:
        assert await fetch_eventbrite_candidates(client, SOURCE, "tok") == []


@pytest.mark.asyncio
async def test_missing_token_skips_source():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with make_client(handler) as client:
        assert await fetch_eventbrite_candidates(client, SOURCE, None) == []
