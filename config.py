"""Environment configuration for the Eventis scraper service."""
import os

# Remote store (JSONBin)
JSONBIN_API_KEY = os.getenv("JSONBIN_API_KEY")
JSONBIN_BIN_ID = os.getenv("JSONBIN_BIN_ID")

# Shared secret for the scrape trigger
SCRAPE_SECRET_KEY = os.getenv("SCRAPE_SECRET_KEY")

# Upstream APIs
EVENTBRITE_API_TOKEN = os.getenv("EVENTBRITE_API_TOKEN")
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# Free tier allows ~15 req/min; 4.5s between calls leaves headroom
GEMINI_REQUEST_DELAY = float(os.getenv("GEMINI_REQUEST_DELAY", "4.5"))

EVENTS_CACHE_TTL = int(os.getenv("EVENTS_CACHE_TTL", "60"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else ["*"]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "3000"))

REQUIRED_SETTINGS = (
    "JSONBIN_API_KEY",
    "JSONBIN_BIN_ID",
    "SCRAPE_SECRET_KEY",
    "EVENTBRITE_API_TOKEN",
    "GEMINI_API_KEY",
)


def missing_settings() -> list[str]:
    """Names of required settings that are not configured."""
    return [name for name in REQUIRED_SETTINGS if not globals().get(name)]
