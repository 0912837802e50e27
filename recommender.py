"""Natural-language event recommendations over a client's current event list."""
import json
import logging
from typing import Optional

from models import EventSnapshot

logger = logging.getLogger(__name__)

MAX_CONTEXT_EVENTS = 15

RECOMMENDATION_PROMPT = """Eres un asistente amable, útil y conciso que recomienda eventos en Chile.
El usuario pregunta: "{question}".

Eventos disponibles que podrían servir para la recomendación:
{events}

Según la pregunta y los eventos disponibles:
1. Si pregunta por un tipo de evento o una característica (ej. "eventos gratis", "conciertos en Santiago",
   "planes para familia"), recomienda de 1 a 3 eventos específicos de la lista. Si ninguno calza, díselo amablemente.
2. Si la pregunta es muy general ("¿qué hay hoy?", "¿qué me recomiendas?"), sugiere usar los filtros de la página
   o precisar qué tipo de plan busca.
3. Si la pregunta no tiene que ver con eventos, o no puedes responderla, díselo amablemente.
4. Responde en máximo 200 caracteres, de forma amigable. No inventes eventos que no estén en la lista.
"""

EMPTY_EVENTS_NOTE = (
    "No hay eventos específicos cargados en la lista actual. "
    "Puedes sugerirle al usuario que use los filtros de la página."
)


def format_budget(budget: Optional[int]) -> str:
    """Human-readable price bucket."""
    if budget == 0:
        return "Gratis"
    if budget is None or budget == -1:
        return "Precio no especificado"
    return f"Hasta ${budget} USD"


def build_events_context(current_events: Optional[list[EventSnapshot]]) -> list[dict]:
    """Project the first events of the client's view into the prompt context."""
    if not current_events:
        return []
    return [
        {
            "name": e.name,
            "description": e.description,
            "location": e.location,
            "date": e.date,
            "budget": format_budget(e.budget),
            "planType": e.planType,
        }
        for e in current_events[:MAX_CONTEXT_EVENTS]
    ]


def build_recommendation_prompt(question: str, context: list[dict]) -> str:
    events = json.dumps(context, ensure_ascii=False, indent=2) if context else EMPTY_EVENTS_NOTE
    return RECOMMENDATION_PROMPT.format(question=question, events=events)


async def recommend_event(llm, question: str, current_events: Optional[list[EventSnapshot]] = None) -> str:
    """One gated model call; quota and vendor errors propagate to the caller."""
    context = build_events_context(current_events)
    logger.info(f"Recommendation requested with {len(context)} events in context")
    reply = await llm.generate(build_recommendation_prompt(question, context))
    return reply.strip()
