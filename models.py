"""Data models for the event pipeline."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SourceKind = Literal["html", "rss", "api"]
PlanType = Literal["solo", "pareja", "grupo", "familiar", "cualquiera"]

# 0 = free, -1 = unknown price, 10..50 = "up to N USD", 51 = more than 50 USD
BUDGET_VALUES = (0, 10, 20, 30, 40, 50, 51, -1)
PLAN_TYPES = ("solo", "pareja", "grupo", "familiar", "cualquiera")

NO_DATE = "Sin fecha"


class SourceDescriptor(BaseModel):
    """A configured upstream location that yields candidates."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: SourceKind
    city: str  # City label, also the default location forwarded to the LLM
    url: Optional[str] = None  # Not used by the "api" kind


class RawCandidate(BaseModel):
    """Unvalidated extraction from a source, before classification."""
    name: str = Field(min_length=1)
    description: str = ""
    sourceUrl: str = Field(min_length=1)
    imageUrl: Optional[str] = None
    location: Optional[str] = None
    rawDate: Optional[str] = None


class Event(BaseModel):
    """An event accepted by the classifier and eligible for publication."""
    name: str = Field(min_length=1, max_length=80)
    description: str = Field(max_length=150)
    sourceUrl: str = Field(min_length=1)
    city: str
    location: str
    date: str  # YYYY-MM-DD or "Sin fecha"
    budget: int
    planType: PlanType
    imageUrl: Optional[str] = None  # In-memory only, stripped on publish

    @field_validator("budget")
    @classmethod
    def check_budget(cls, value: int) -> int:
        if value not in BUDGET_VALUES:
            raise ValueError(f"budget must be one of {BUDGET_VALUES}")
        return value

    def to_record(self) -> dict:
        """Shape stored in the remote document."""
        return self.model_dump(exclude={"imageUrl"})


class EventSnapshot(BaseModel):
    """An event as sent back by a client; every field is optional."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    budget: Optional[int] = None
    planType: Optional[str] = None


class RecommendationRequest(BaseModel):
    question: str
    currentEvents: Optional[list[EventSnapshot]] = None
