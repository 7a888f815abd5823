"""Leveling fit against a role's must-have tags."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import Candidate, Interview, Role
from .base import ComponentScore, clamp, fold, format_number


@dataclass
class LevelingConfig:
    """Thresholds and bonuses for leveling evaluation."""

    base_score: float = 0.5
    tenure_bonus: float = 0.1
    tenure_bonus_months: int = 12
    communication_keyword: str = "stakeholder"
    communication_threshold: float = 4.0
    interview_midpoint: float = 3.5
    interview_scale: float = 10.0


class LevelingScorer:
    """Share of must-haves evidenced by skills, domains or interview feedback."""

    component = "leveling"

    def __init__(self, *, config: LevelingConfig | None = None) -> None:
        self._config = config or LevelingConfig()

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> ComponentScore:
        must_haves = role.leveling_must_haves
        if not must_haves:
            return ComponentScore(score=self._config.base_score)

        evidence: list[str] = []
        skills = fold(candidate.skills)
        domains = fold(candidate.experience_domains)

        matches = 0
        for tag in must_haves:
            hit = self._match_tag(tag, skills, domains, interview)
            if hit is not None:
                matches += 1
                evidence.append(hit)

        value = matches / len(must_haves)

        history = candidate.internal_history
        if history is not None and history.tenure_months >= self._config.tenure_bonus_months:
            value += self._config.tenure_bonus
            evidence.append(f"Internal tenure: {history.tenure_months} months")

        if interview is not None:
            average = interview.panel_scores.average()
            value += (average - self._config.interview_midpoint) / self._config.interview_scale
            evidence.append(f"Interview avg: {average:.1f}/5")

        return ComponentScore(score=clamp(value), evidence=evidence)

    def _match_tag(
        self,
        tag: str,
        skills: list[str],
        domains: list[str],
        interview: Interview | None,
    ) -> str | None:
        normalized = tag.lower().replace("_", " ")
        if any(normalized in skill for skill in skills):
            return f"Has skill: {tag}"
        if any(normalized in domain for domain in domains):
            return f"Has domain: {tag}"
        if (
            interview is not None
            and self._config.communication_keyword in normalized
            and interview.panel_scores.communication >= self._config.communication_threshold
        ):
            communication = format_number(interview.panel_scores.communication)
            return f"Interview communication: {communication}/5"
        return None
