"""Weighted aggregation of component scores into a match score."""

from __future__ import annotations

import math
from typing import Iterable

from ..schemas import COMPONENTS, Candidate, Interview, MatchScore, Role, ScoreBreakdown
from .constraints import ConstraintEvaluator
from .scorers import (
    BackgroundFitScorer,
    ComponentScore,
    FunctionSkillsScorer,
    LevelingScorer,
    ToolsScorer,
)
from .scorers.base import format_number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class MatchScorer:
    """Gates a pair on hard constraints, then weighs the component scorers."""

    DEFAULT_EVIDENCE_LIMIT = 5

    def __init__(
        self,
        scorers: Iterable[object] | None = None,
        *,
        constraints: ConstraintEvaluator | None = None,
        evidence_limit: int | None = None,
    ) -> None:
        if scorers is None:
            scorers = [LevelingScorer(), FunctionSkillsScorer(), ToolsScorer(), BackgroundFitScorer()]
        self._scorers = list(scorers)
        unknown = [s.component for s in self._scorers if s.component not in COMPONENTS]
        if unknown:
            raise ValueError(f"Unsupported score components: {unknown}")
        self._constraints = constraints or ConstraintEvaluator()
        self._evidence_limit = (
            self.DEFAULT_EVIDENCE_LIMIT if evidence_limit is None else evidence_limit
        )

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> MatchScore:
        check = self._constraints.evaluate(candidate, role)
        if not check.passed:
            return MatchScore.rejected(candidate.candidate_id, role.role_id, check.violations)

        results: dict[str, ComponentScore] = {
            scorer.component: scorer.score(candidate, role, interview)
            for scorer in self._scorers
        }

        weighted = {
            component: result.score * role.weights.for_component(component) * 100
            for component, result in results.items()
        }
        # The total is rounded once from unrounded parts and may drift by one
        # from sum(breakdown).
        total = round_half_up(sum(weighted.values()))
        breakdown = ScoreBreakdown(
            **{component: round_half_up(value) for component, value in weighted.items()}
        )

        evidence: list[str] = []
        for component in COMPONENTS:
            if component in results:
                evidence.extend(results[component].evidence)
        evidence = evidence[: self._evidence_limit]
        if candidate.experience_years_total > 0:
            evidence.insert(0, self._summary_line(candidate))

        return MatchScore(
            candidate_id=candidate.candidate_id,
            role_id=role.role_id,
            total_score=min(100, max(0, total)),
            breakdown=breakdown,
            evidence=evidence,
            passed_constraints=True,
        )

    @staticmethod
    def _summary_line(candidate: Candidate) -> str:
        primary = candidate.experience_domains[0] if candidate.experience_domains else "General"
        years = format_number(candidate.experience_years_total)
        return f"{candidate.name}: {years} yrs exp, {primary} domain"
