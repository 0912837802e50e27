import pytest

from conftest import FakeLLM
from llm import QuotaExceededError
from models import EventSnapshot
from recommender import (
    EMPTY_EVENTS_NOTE,
    MAX_CONTEXT_EVENTS,
    build_events_context,
    build_recommendation_prompt,
    format_budget,
    recommend_event,
)


@pytest.mark.parametrize("budget,label", [
    (0, "Gratis"),
    (-1, "Precio no especificado"),
    (None, "Precio no especificado"),
    (20, "Hasta $20 USD"),
    (51, "Hasta $51 USD"),
])
def test_format_budget(budget, label):
    assert format_budget(budget) == label


def test_context_is_capped_and_projected():
    snapshots = [
        EventSnapshot(name=f"Evento {n}", description="d", location="l", date="2099-01-01", budget=0, planType="solo")
        for n in range(20)
    ]
    context = build_events_context(snapshots)

    assert len(context) == MAX_CONTEXT_EVENTS == 15
    assert context[0] == {
        "name": "Evento 0",
        "description": "d",
        "location": "l",
        "date": "2099-01-01",
        "budget": "Gratis",
        "planType": "solo",
    }
    assert context[-1]["name"] == "Evento 14"


def test_context_empty():
    assert build_events_context(None) == []
    assert build_events_context([]) == []


def test_prompt_mentions_question_rules_and_events():
    prompt = build_recommendation_prompt("¿Algo gratis?", [{"name": "Feria {especial}"}])

    assert '"¿Algo gratis?"' in prompt
    assert "Feria {especial}" in prompt
    assert "200 caracteres" in prompt
    assert "1 a 3 eventos" in prompt
    assert EMPTY_EVENTS_NOTE not in prompt


def test_prompt_with_empty_list_suggests_filters():
    prompt = build_recommendation_prompt("¿Qué hay hoy?", [])
    assert EMPTY_EVENTS_NOTE in prompt
    assert "filtros" in prompt


@pytest.mark.asyncio
async def test_recommend_event_makes_one_call():
    llm = FakeLLM(["  Te recomiendo usar los filtros de la página.  "])
    answer = await recommend_event(llm, "¿Qué hay hoy?", [])

    assert answer == "Te recomiendo usar los filtros de la página."
    assert len(llm.prompts) == 1


@pytest.mark.asyncio
async def test_recommend_event_propagates_quota():
    llm = FakeLLM([QuotaExceededError("429")])
    with pytest.raises(QuotaExceededError):
        await recommend_event(llm, "¿Qué hay hoy?")
