"""Background fit from internal history and domain proximity."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import Candidate, Interview, Role
from .base import ComponentScore, clamp, mutual_substring


@dataclass
class BackgroundFitConfig:
    """Bonuses applied on top of the neutral base score."""

    base_score: float = 0.5
    same_function_bonus: float = 0.2
    related_bu_bonus: float = 0.2
    tenure_bonus: float = 0.1
    tenure_bonus_months: int = 18
    domain_bonus: float = 0.1


class BackgroundFitScorer:
    """Reward internal mobility and adjacent domain experience."""

    component = "background_fit"

    def __init__(self, *, config: BackgroundFitConfig | None = None) -> None:
        self._config = config or BackgroundFitConfig()

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> ComponentScore:
        cfg = self._config
        evidence: list[str] = []
        value = cfg.base_score

        history = candidate.internal_history
        if candidate.is_internal and history is not None:
            if history.function == role.function:
                value += cfg.same_function_bonus
                evidence.append(f"Internal: same function ({history.function})")
            if mutual_substring(history.last_bu, role.subfunction):
                value += cfg.related_bu_bonus
                evidence.append(f"Internal: related BU ({history.last_bu})")
            if history.tenure_months >= cfg.tenure_bonus_months:
                value += cfg.tenure_bonus
                evidence.append(f"Internal: strong tenure ({history.tenure_months} months)")

        if any(mutual_substring(domain, role.subfunction) for domain in candidate.experience_domains):
            value += cfg.domain_bonus
            evidence.append(f"Domain fit: {', '.join(candidate.experience_domains)}")

        return ComponentScore(score=clamp(value), evidence=evidence)
