from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

COMPONENTS: tuple[str, ...] = ("leveling", "function_skills", "tools", "background_fit")


class ScoreBreakdown(BaseModel):
    """Weighted component contributions, each rounded to an integer."""

    leveling: int = Field(default=0, ge=0)
    function_skills: int = Field(default=0, ge=0)
    tools: int = Field(default=0, ge=0)
    background_fit: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class MatchScore(BaseModel):
    """Compatibility of one candidate with one role.

    ``total_score`` is rounded on its own from the unrounded component values, so it
    may differ by one from the sum of ``breakdown``.
    """

    candidate_id: str
    role_id: str
    total_score: int = Field(default=0, ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    evidence: list[str] = Field(default_factory=list)
    passed_constraints: bool = True
    constraint_violations: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_constraint_flag(self) -> "MatchScore":
        if self.passed_constraints == bool(self.constraint_violations):
            raise ValueError("passed_constraints must be True exactly when there are no violations")
        if not self.passed_constraints and (self.total_score or self.evidence):
            raise ValueError("failed matches carry no score or evidence")
        return self

    @classmethod
    def rejected(cls, candidate_id: str, role_id: str, violations: list[str]) -> "MatchScore":
        return cls(
            candidate_id=candidate_id,
            role_id=role_id,
            passed_constraints=False,
            constraint_violations=list(violations),
        )


class Batch(BaseModel):
    """Immutable snapshot of ranked matches handed to approvers."""

    batch_id: str
    created_at: datetime
    sent_at: datetime | None = None
    matches: tuple[MatchScore, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_sent(self) -> bool:
        return self.sent_at is not None

    def role_ids(self) -> list[str]:
        return list(dict.fromkeys(match.role_id for match in self.matches))


class Reservation(BaseModel):
    """Exclusive assignment of a candidate to a role."""

    candidate_id: str
    role_id: str
    reserved_at: datetime
    reserved_by: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class Rejection(BaseModel):
    """Approver feedback declining a candidate for a role."""

    candidate_id: str
    role_id: str
    reason: str
    rejected_at: datetime
    rejected_by: str

    model_config = ConfigDict(extra="forbid", frozen=True)
