"""
Eventis Event Scraper Service
Harvests events from Chilean sources, curates them with Gemini and publishes the set to JSONBin.

Data sources:
1. HTML agenda pages - card extraction with BeautifulSoup
2. RSS feeds - parsed with feedparser
3. Eventbrite - search API, free events (needs EVENTBRITE_API_TOKEN)
"""
import logging
import secrets
from typing import Optional, get_args

import httpx
from cachetools import TTLCache
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

import config
from jsonbin import JsonBinStore, StoreError
from llm import GeminiClient, QuotaExceededError, get_gemini_model
from models import RecommendationRequest, SourceKind
from pipeline import run_scrape
from rate_gate import RateGate
from recommender import recommend_event
from sources import EVENT_SOURCES, sources_by_kind

VERSION = "10.4"

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Eventis Event Scraper",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for name in config.missing_settings():
    logger.warning(f"{name} is not configured; endpoints that need it will answer 500")

# One gate for every Gemini call in the process, scrape and chatbot alike
llm_gate = RateGate(config.GEMINI_REQUEST_DELAY)

llm: Optional[GeminiClient] = None
gemini_model = get_gemini_model(config.GEMINI_API_KEY, config.GEMINI_MODEL)
if gemini_model:
    llm = GeminiClient(gemini_model, llm_gate)
    logger.info(f"Gemini initialized with model {config.GEMINI_MODEL}")

store = JsonBinStore(config.JSONBIN_API_KEY, config.JSONBIN_BIN_ID)

# Last read of the published set, dropped on every publish
events_cache = TTLCache(maxsize=1, ttl=config.EVENTS_CACHE_TTL)
EVENTS_CACHE_KEY = "events"
# Bumped on every publish; reads that straddle a publish are not cached
publish_generation = 0


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def is_valid_scrape_key(key: Optional[str]) -> bool:
    if not key or not config.SCRAPE_SECRET_KEY:
        return False
    return secrets.compare_digest(key.encode(), config.SCRAPE_SECRET_KEY.encode())


@app.get("/", response_class=PlainTextResponse)
async def root():
    return f"Motor de Eventis v{VERSION} funcionando (filtro de eventos futuros, paginación Eventbrite, cuota Gemini)."


@app.get("/health")
async def health():
    """Health check with the configured integrations."""
    return {
        "status": "healthy",
        "version": VERSION,
        "sources": {kind: len(sources_by_kind(kind)) for kind in get_args(SourceKind)},
        "gemini_enabled": llm is not None,
        "eventbrite_enabled": bool(config.EVENTBRITE_API_TOKEN),
        "store_configured": store.configured,
    }


@app.get("/events")
async def get_events():
    """Latest published event set."""
    if not store.configured:
        return error_response(500, "El servidor no está configurado correctamente (faltan JSONBIN_API_KEY/JSONBIN_BIN_ID).")

    if EVENTS_CACHE_KEY in events_cache:
        return events_cache[EVENTS_CACHE_KEY]

    generation = publish_generation
    try:
        async with httpx.AsyncClient() as client:
            events = await store.read_events(client)
    except StoreError as e:
        logger.error(f"Could not read events from JSONBin: {e}")
        return error_response(500, "No se pudo obtener la lista de eventos de la bodega.")

    if generation == publish_generation:
        events_cache[EVENTS_CACHE_KEY] = events
    return events


@app.get("/run-scrape", response_class=PlainTextResponse)
async def trigger_scrape(key: Optional[str] = Query(default=None, description="Shared scrape secret")):
    """Run a full scrape and replace the published set."""
    if not config.SCRAPE_SECRET_KEY:
        return PlainTextResponse("El servidor no tiene configurada SCRAPE_SECRET_KEY.", status_code=500)
    if not is_valid_scrape_key(key):
        return PlainTextResponse("Clave secreta inválida. Acceso no autorizado.", status_code=401)
    if not store.configured:
        return PlainTextResponse("El servidor no está configurado correctamente (JSONBin).", status_code=500)
    if llm is None:
        return PlainTextResponse("El modelo de IA no está inicializado. Verifica GEMINI_API_KEY.", status_code=500)

    logger.info("Scrape triggered")
    async with httpx.AsyncClient() as client:
        result = await run_scrape(client, llm, EVENT_SOURCES, config.EVENTBRITE_API_TOKEN)
        try:
            await store.publish(client, result.events)
        except StoreError as e:
            logger.error(f"Could not publish events: {e}")
            return PlainTextResponse("Error al guardar los eventos en la bodega. Revisa los logs.", status_code=500)

    global publish_generation
    publish_generation += 1
    events_cache.clear()
    return f"Scraping completado. {len(result.events)} eventos de calidad guardados en JSONBin."


@app.post("/recommend-event-ai")
async def recommend(request: RecommendationRequest):
    """Answer a free-form question about the client's current events."""
    if llm is None:
        return error_response(500, "El modelo de IA para el chatbot no está inicializado. Verifica GEMINI_API_KEY.")

    try:
        recommendation = await recommend_event(llm, request.question, request.currentEvents)
    except QuotaExceededError:
        logger.warning("[Gemini chatbot] Quota exceeded")
        return error_response(429, "Lo siento, el asistente está muy ocupado. Por favor, intenta de nuevo en un minuto.")
    except Exception as e:
        logger.error(f"Recommendation failed: {type(e).__name__}: {e}")
        return error_response(500, "Lo siento, no se pudo generar una recomendación en este momento. Intenta de nuevo más tarde.")

    return {"recommendation": recommendation}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
