"""Core matching engine components."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import Candidate, Interview, Role

# NOTE: keep imports explicit for export clarity.
from .aggregator import MatchScorer
from .constraints import ConstraintConfig, ConstraintEvaluator, ConstraintResult
from .ranking import Ranker
from .scorers import (
    BackgroundFitScorer,
    ComponentScore,
    FunctionSkillsScorer,
    LevelingScorer,
    ToolsScorer,
)


@runtime_checkable
class ComponentScorer(Protocol):
    """Scorer contract for one weighted component of a match."""

    component: str

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> ComponentScore:
        """Return a normalized sub-score with supporting evidence."""


__all__ = [
    "ComponentScorer",
    "ComponentScore",
    "ConstraintConfig",
    "ConstraintEvaluator",
    "ConstraintResult",
    "MatchScorer",
    "Ranker",
    "LevelingScorer",
    "FunctionSkillsScorer",
    "ToolsScorer",
    "BackgroundFitScorer",
]
