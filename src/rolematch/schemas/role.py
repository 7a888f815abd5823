from __future__ import annotations

import math
from datetime import date, datetime
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError
from .candidate import LanguageLevel

WorkModel = Literal["Remote", "Hybrid", "On-site"]
InternalStrategy = Literal["internal_only", "internal_first", "open"]

_logger = structlog.get_logger(__name__)


class LanguageRequirement(BaseModel):
    """Minimum proficiency a role expects for a language."""

    code: str
    min: LanguageLevel

    model_config = ConfigDict(extra="forbid", frozen=True)


class HardConstraints(BaseModel):
    """Pass/fail gates evaluated before scoring."""

    language_fluent: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)


class ScoringWeights(BaseModel):
    """Per-role weights for the four score components."""

    leveling: float = Field(default=0.45, ge=0)
    function_skills: float = Field(default=0.35, ge=0)
    tools: float = Field(default=0.10, ge=0)
    background_fit: float = Field(default=0.10, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def for_component(self, component: str) -> float:
        return float(getattr(self, component))

    def total(self) -> float:
        return self.leveling + self.function_skills + self.tools + self.background_fit


class NearTermScope(BaseModel):
    """Narrative context captured at role intake."""

    challenges: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    kpis: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Role(BaseModel):
    """Open role and its scoring contract."""

    role_id: str
    title: str = ""
    function: str = ""
    subfunction: str = ""
    country: str = ""
    work_model: WorkModel = "Hybrid"
    start_preference: date | None = None
    reporting_line: str = ""
    target_levels: list[str] = Field(default_factory=list)
    level_flex_range: list[str] = Field(default_factory=list)
    internal_first_strategy: InternalStrategy = "open"
    internal_days: int = Field(default=0, ge=0)
    confidential: bool = False
    languages_required: list[LanguageRequirement] = Field(default_factory=list)
    leveling_must_haves: list[str] = Field(default_factory=list, max_length=5)
    preferred_skills: list[str] = Field(default_factory=list)
    tools_top5: list[str] = Field(default_factory=list, max_length=5)
    day_in_the_life: list[str] = Field(default_factory=list)
    experience_domains: list[str] = Field(default_factory=list)
    near_term_scope: NearTermScope = Field(default_factory=NearTermScope)
    hard_constraints: HardConstraints = Field(default_factory=HardConstraints)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    created_at: datetime | None = None
    age_days: int = Field(default=0, ge=0)
    manager: str | None = None
    ta_responsible: str | None = None

    model_config = ConfigDict(extra="allow", frozen=True)


def ensure_scoring_contract(role: Role) -> Role:
    """Reject roles whose weights or must-haves cannot produce a meaningful score.

    Weights that do not sum to 1.0 are tolerated and only logged.
    """
    if not role.leveling_must_haves:
        raise ConfigurationError(
            f"Role {role.role_id!r} has no leveling must-haves."
        )
    total = role.weights.total()
    if total <= 0:
        raise ConfigurationError(f"Role {role.role_id!r} has all-zero weights.")
    if not math.isclose(total, 1.0, abs_tol=1e-6):
        _logger.warning("role.weights_unbalanced", role_id=role.role_id, total=total)
    return role
