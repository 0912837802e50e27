"""JSONBin document store holding the published event set."""
import logging
from typing import Optional

import httpx

from models import Event
from scrapers.utils import excerpt

logger = logging.getLogger(__name__)

JSONBIN_BASE_URL = "https://api.jsonbin.io/v3/b"
STORE_TIMEOUT = 30.0


class StoreError(Exception):
    """The remote document could not be read or written."""


class JsonBinStore:
    """
    Reads and replaces a single JSONBin document.

    The document is always overwritten as a whole; there is no per-event update.
    """

    def __init__(self, api_key: Optional[str], bin_id: Optional[str]):
        self.api_key = api_key
        self.bin_id = bin_id

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.bin_id)

    @property
    def url(self) -> str:
        return f"{JSONBIN_BASE_URL}/{self.bin_id}"

    async def read_events(self, client: httpx.AsyncClient) -> list[dict]:
        """Latest published events, as stored."""
        try:
            response = await client.get(
                f"{self.url}/latest",
                headers={"X-Master-Key": self.api_key},
                timeout=STORE_TIMEOUT,
            )
            response.raise_for_status()
            record = response.json()["record"]
        except httpx.HTTPStatusError as e:
            raise StoreError(f"read failed with status {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            raise StoreError(f"read failed: {type(e).__name__}: {e}") from e

        events = record.get("events", []) if isinstance(record, dict) else None
        if not isinstance(events, list):
            raise StoreError("stored record has no events list")
        return events

    async def publish(self, client: httpx.AsyncClient, events: list[Event]) -> None:
        """Replace the stored set in one PUT. On failure the previous set is left untouched."""
        body = {"events": [event.to_record() for event in events]}
        try:
            response = await client.put(
                self.url,
                json=body,
                headers={"Content-Type": "application/json", "X-Master-Key": self.api_key},
                timeout=STORE_TIMEOUT,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"JSONBin publish failed: status {e.response.status_code}, body {excerpt(e.response.text)}")
            raise StoreError(f"publish failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"JSONBin publish failed: {type(e).__name__}: {e}")
            raise StoreError(f"publish failed: {type(e).__name__}") from e

        logger.info(f"Published {len(events)} events to JSONBin")
