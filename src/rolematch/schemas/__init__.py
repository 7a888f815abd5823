"""Pydantic schema definitions for allocation records."""

from __future__ import annotations

from .candidate import (
    LANGUAGE_LEVELS,
    Candidate,
    InternalHistory,
    LanguageSkill,
)
from .interview import Interview, PanelScores, PipelineEntry
from .match import (
    COMPONENTS,
    Batch,
    MatchScore,
    Rejection,
    Reservation,
    ScoreBreakdown,
)
from .role import (
    HardConstraints,
    LanguageRequirement,
    NearTermScope,
    Role,
    ScoringWeights,
    ensure_scoring_contract,
)
from .state import AllocationState

__all__ = [
    "LANGUAGE_LEVELS",
    "COMPONENTS",
    "Candidate",
    "InternalHistory",
    "LanguageSkill",
    "Interview",
    "PanelScores",
    "PipelineEntry",
    "Role",
    "LanguageRequirement",
    "HardConstraints",
    "NearTermScope",
    "ScoringWeights",
    "ensure_scoring_contract",
    "MatchScore",
    "ScoreBreakdown",
    "Batch",
    "Reservation",
    "Rejection",
    "AllocationState",
]
