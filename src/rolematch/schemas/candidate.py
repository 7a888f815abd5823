from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LanguageLevel = Literal["A1", "A2", "B1", "B2", "C1", "C2"]
CandidateOrigin = Literal["internal", "external"]

LANGUAGE_LEVELS: dict[str, int] = {
    "A1": 1,
    "A2": 2,
    "B1": 3,
    "B2": 4,
    "C1": 5,
    "C2": 6,
}


class LanguageSkill(BaseModel):
    """Spoken language with a CEFR proficiency level."""

    code: str
    level: LanguageLevel

    model_config = ConfigDict(extra="forbid", frozen=True)


class InternalHistory(BaseModel):
    """Prior assignment of an internal candidate."""

    function: str
    tenure_months: int = Field(default=0, ge=0)
    last_bu: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Candidate(BaseModel):
    """Candidate record supplied by the intake collaborator."""

    candidate_id: str
    name: str = ""
    origin: CandidateOrigin = "external"
    linkedin_url: str | None = None
    country: str = ""
    time_zone: str | None = None
    languages: list[LanguageSkill] = Field(default_factory=list)
    experience_years_total: float = Field(default=0.0, ge=0)
    experience_domains: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    internal_history: InternalHistory | None = None
    availability_date: date | None = None
    notes: str = ""

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def is_internal(self) -> bool:
        return self.origin == "internal"

    def language(self, code: str) -> LanguageSkill | None:
        for entry in self.languages:
            if entry.code == code:
                return entry
        return None
