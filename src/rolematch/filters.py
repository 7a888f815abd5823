"""Record filters used before building a shortlist."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .schemas import Candidate, PipelineEntry, Role


class MatchFilters(BaseModel):
    """Optional narrowing of the roles or candidates that get ranked."""

    country: str | None = None
    function: str | None = None
    level: str | None = None
    language: str | None = None
    stale_in_pipe: int | None = Field(default=None, ge=0)
    old_role: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")

    def apply_to_roles(self, roles: Iterable[Role]) -> list[Role]:
        selected: list[Role] = []
        for role in roles:
            if self.country and role.country != self.country:
                continue
            if self.function and role.function != self.function:
                continue
            if self.level and self.level not in role.target_levels:
                continue
            if self.language and not any(
                req.code == self.language for req in role.languages_required
            ):
                continue
            # roles have no pipeline of their own; staleness means age
            if self.stale_in_pipe and role.age_days < self.stale_in_pipe:
                continue
            if self.old_role and role.age_days < self.old_role:
                continue
            selected.append(role)
        return selected

    def apply_to_candidates(
        self,
        candidates: Iterable[Candidate],
        pipeline: Sequence[PipelineEntry] = (),
    ) -> list[Candidate]:
        selected: list[Candidate] = []
        for candidate in candidates:
            if self.country and candidate.country != self.country:
                continue
            if self.language and candidate.language(self.language) is None:
                continue
            if self.stale_in_pipe:
                entry = next(
                    (p for p in pipeline if p.candidate_id == candidate.candidate_id), None
                )
                if entry is None or entry.time_in_pipe_days < self.stale_in_pipe:
                    continue
            selected.append(candidate)
        return selected


def starts_within_buffer(role: Role, today: date, buffer_days: int = 30) -> bool:
    """True when the role's preferred start leaves less than ``buffer_days`` to onboard."""
    if role.start_preference is None:
        return False
    return role.start_preference < today + timedelta(days=buffer_days)
