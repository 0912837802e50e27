"""
LLM classification of raw candidates.
Decides whether a candidate is a real, upcoming, attendable event and
rewrites its fields into the published Event shape.
"""
import json
import logging
import re
from typing import Any, Optional

from pydantic import ValidationError

from llm import QuotaExceededError
from models import BUDGET_VALUES, NO_DATE, PLAN_TYPES, Event, RawCandidate

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 80
MAX_DESCRIPTION_LENGTH = 150
DEFAULT_NAME = "Evento sin título"
DEFAULT_DESCRIPTION = "Sin descripción."
UNKNOWN_LOCATION = "Por confirmar"
UNKNOWN_BUDGET = -1
DEFAULT_PLAN_TYPE = "cualquiera"

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")

CLASSIFICATION_PROMPT = """Analiza el siguiente contenido, que podría corresponder a un evento público en Chile.

Un evento válido es una actividad concreta a la que una persona puede asistir, participar o ver.
NO son eventos: noticias, comunicados de prensa, artículos, programas continuos, concursos,
reaperturas de instalaciones, demoliciones, balances municipales ni llamados genéricos a la acción.

Además, el evento debe tener una FECHA o PERÍODO claro y una UBICACIÓN clara (un lugar físico o 'Online').

Si NO es un evento válido, o le falta fecha o ubicación clara, responde SOLAMENTE con este JSON:
{{"isEvent": false}}

Si es un evento válido, responde SOLAMENTE con un JSON con este formato:
{{
  "isEvent": true,
  "name": "Nombre conciso y atractivo. Máximo 80 caracteres.",
  "description": "Qué es y por qué vale la pena. Máximo 150 caracteres. Sin frases como 'click aquí' o 'más información'.",
  "location": "Lugar específico (ej. 'Parque O'Higgins, Santiago') o 'Online'. Si el original es genérico ('Santiago', 'Nacional') intenta precisarlo. Si no se conoce, 'Por confirmar'.",
  "date": "AAAA-MM-DD. Si es un rango, la fecha de inicio. Si no hay fecha clara, 'Sin fecha'.",
  "budget": 0 | 10 | 20 | 30 | 40 | 50 | 51 | -1,
  "planType": "solo" | "pareja" | "grupo" | "familiar" | "cualquiera",
  "sourceUrl": "URL original del evento"
}}

budget: 0 = gratis, 10 = hasta 10 USD, 20 = hasta 20 USD, 30 = hasta 30 USD, 40 = hasta 40 USD,
50 = hasta 50 USD, 51 = más de 50 USD, -1 = precio desconocido.
planType: cómo se disfruta mejor el evento.

Contenido a analizar:
Nombre original: {name}
Descripción original: {description}
URL original: {source_url}
Ubicación original: {location}
Fecha original: {raw_date}
"""


def build_classification_prompt(candidate: RawCandidate) -> str:
    missing = "No especificado"
    return CLASSIFICATION_PROMPT.format(
        name=candidate.name or missing,
        description=candidate.description or missing,
        source_url=candidate.sourceUrl or missing,
        location=candidate.location or missing,
        raw_date=candidate.rawDate or missing,
    )


def extract_json_object(text: str) -> Optional[dict]:
    """
    Parse the first balanced {...} block in a model reply.
    The model sometimes wraps its JSON in prose or markdown fences.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    parsed = json.loads(text[start:i + 1])
                except json.JSONDecodeError:
                    return None
                return parsed if isinstance(parsed, dict) else None
    return None


def _clean_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _coerce_budget(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return UNKNOWN_BUDGET
    try:
        budget = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return UNKNOWN_BUDGET
    return budget if budget in BUDGET_VALUES else UNKNOWN_BUDGET


def _coerce_date(value: Any) -> str:
    text = _clean_str(value)
    if DATE_PATTERN.match(text):
        return text[:10]
    return NO_DATE


def _coerce_plan_type(value: Any) -> str:
    plan_type = _clean_str(value).lower()
    return plan_type if plan_type in PLAN_TYPES else DEFAULT_PLAN_TYPE


def normalize_event(data: dict, candidate: RawCandidate) -> Event:
    """Apply field caps and defaults to an accepted model reply."""
    name = _clean_str(data.get("name"))
    if not name or len(name) > MAX_NAME_LENGTH:
        name = candidate.name[:MAX_NAME_LENGTH].strip() or DEFAULT_NAME

    description = _clean_str(data.get("description"))
    if not description or len(description) > MAX_DESCRIPTION_LENGTH:
        description = (candidate.description or "")[:MAX_DESCRIPTION_LENGTH].strip() or DEFAULT_DESCRIPTION

    location = _clean_str(data.get("location")) or (candidate.location or "").strip() or UNKNOWN_LOCATION

    return Event(
        name=name,
        description=description,
        sourceUrl=_clean_str(data.get("sourceUrl")) or candidate.sourceUrl,
        city=location,
        location=location,
        date=_coerce_date(data.get("date")),
        budget=_coerce_budget(data.get("budget")),
        planType=_coerce_plan_type(data.get("planType")),
        imageUrl=candidate.imageUrl,
    )


async def classify_candidate(llm, candidate: RawCandidate) -> Optional[Event]:
    """
    Ask the model about one candidate.
    Returns the rewritten Event, or None when the candidate is rejected or the call fails.
    """
    label = candidate.name[:30]
    try:
        reply = await llm.generate(build_classification_prompt(candidate))
    except QuotaExceededError:
        logger.warning(f"[Gemini] Quota exceeded for \"{label}\", dropping it until the next run")
        return None
    except Exception as e:
        logger.error(f"[Gemini] Call failed for \"{label}\": {type(e).__name__}: {e}")
        return None

    reply = reply or ""
    logger.debug(f"[Gemini] Raw reply for \"{label}...\": {reply[:200]}")

    data = extract_json_object(reply)
    if data is None or data.get("isEvent") is not True:
        return None

    try:
        return normalize_event(data, candidate)
    except (ValidationError, TypeError, ValueError, OverflowError) as e:
        logger.error(f"[Gemini] Reply for \"{label}\" did not normalize: {e}")
        return None
