"""Hard constraint checks evaluated before scoring."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas import LANGUAGE_LEVELS, Candidate, Role


@dataclass
class ConstraintConfig:
    """Work models that require the candidate to live in the role's country."""

    location_bound_models: tuple[str, ...] = ("On-site",)


@dataclass(slots=True)
class ConstraintResult:
    passed: bool
    violations: list[str] = field(default_factory=list)


class ConstraintEvaluator:
    """Language and location gates for a candidate/role pair."""

    def __init__(self, *, config: ConstraintConfig | None = None) -> None:
        self._config = config or ConstraintConfig()

    def evaluate(self, candidate: Candidate, role: Role) -> ConstraintResult:
        language = self.check_languages(candidate, role)
        location = self.check_location(candidate, role)
        violations = [*language.violations, *location.violations]
        return ConstraintResult(passed=not violations, violations=violations)

    def check_languages(self, candidate: Candidate, role: Role) -> ConstraintResult:
        violations: list[str] = []
        for requirement in role.languages_required:
            spoken = candidate.language(requirement.code)
            if spoken is None:
                violations.append(f"Missing required language: {requirement.code}")
                continue
            if LANGUAGE_LEVELS[spoken.level] < LANGUAGE_LEVELS[requirement.min]:
                violations.append(
                    f"Language {requirement.code}: candidate has {spoken.level}, "
                    f"required {requirement.min}"
                )

        if role.hard_constraints.language_fluent and violations:
            return ConstraintResult(passed=False, violations=violations)
        # Soft language requirements still report violations; the aggregator
        # blocks on any violation regardless of the flag.
        return ConstraintResult(passed=not violations, violations=violations)

    def check_location(self, candidate: Candidate, role: Role) -> ConstraintResult:
        violations: list[str] = []
        if (
            role.work_model in self._config.location_bound_models
            and candidate.country != role.country
        ):
            violations.append(
                f"{role.work_model} role requires candidate in {role.country}, "
                f"candidate is in {candidate.country}"
            )
        return ConstraintResult(passed=not violations, violations=violations)
