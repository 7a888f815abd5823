"""Jaccard overlap between role requirements and candidate skills."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import Candidate, Interview, Role
from .base import ComponentScore, fold


@dataclass
class FunctionSkillsConfig:
    """Which role fields contribute to the requirement set."""

    include_must_haves: bool = True
    include_preferred: bool = True
    include_domains: bool = True


class FunctionSkillsScorer:
    """Case-folded Jaccard similarity of requirement and capability sets."""

    component = "function_skills"

    def __init__(self, *, config: FunctionSkillsConfig | None = None) -> None:
        self._config = config or FunctionSkillsConfig()

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> ComponentScore:
        required = self._requirement_terms(role)
        skills = fold(candidate.skills)
        domains = fold(candidate.experience_domains)
        offered = dict.fromkeys([*skills, *domains])

        intersection = [term for term in required if term in offered]
        union = set(required) | set(offered)
        jaccard = len(intersection) / len(union) if union else 0.0

        evidence: list[str] = []
        for term in intersection:
            if any(term in skill for skill in skills):
                evidence.append(f"Skill match: {term}")
            if any(term in domain for domain in domains):
                evidence.append(f"Domain match: {term}")

        return ComponentScore(score=jaccard, evidence=evidence)

    def _requirement_terms(self, role: Role) -> list[str]:
        terms: list[str] = []
        if self._config.include_must_haves:
            terms.extend(role.leveling_must_haves)
        if self._config.include_preferred:
            terms.extend(role.preferred_skills)
        if self._config.include_domains:
            terms.extend(role.experience_domains)
        # insertion order keeps evidence stable across runs
        return list(dict.fromkeys(fold(terms)))
