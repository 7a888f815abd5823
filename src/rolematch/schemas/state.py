from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .candidate import Candidate
from .interview import Interview, PipelineEntry
from .match import Batch, Rejection, Reservation
from .role import Role


class AllocationState(BaseModel):
    """Flat record lists persisted between sessions."""

    candidates: list[Candidate] = Field(default_factory=list)
    roles: list[Role] = Field(default_factory=list)
    interviews: list[Interview] = Field(default_factory=list)
    pipeline: list[PipelineEntry] = Field(default_factory=list)
    batches: list[Batch] = Field(default_factory=list)
    current_batch_id: str | None = None
    reservations: list[Reservation] = Field(default_factory=list)
    rejections: list[Rejection] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def find_candidate(self, candidate_id: str) -> Candidate | None:
        return next((c for c in self.candidates if c.candidate_id == candidate_id), None)

    def find_role(self, role_id: str) -> Role | None:
        return next((r for r in self.roles if r.role_id == role_id), None)
