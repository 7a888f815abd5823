from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PipelineStage = Literal["screening", "manager_review", "offer", "accepted"]


class PanelScores(BaseModel):
    """Interview panel sub-scores on a 1-5 scale."""

    technical: float = Field(ge=1, le=5)
    communication: float = Field(ge=1, le=5)
    business: float = Field(ge=1, le=5)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def average(self) -> float:
        return (self.technical + self.communication + self.business) / 3


class Interview(BaseModel):
    """Interview outcome for one candidate against one role."""

    candidate_id: str
    role_id: str
    panel_scores: PanelScores
    notes: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class PipelineEntry(BaseModel):
    """Time a candidate has spent in the hiring pipeline."""

    candidate_id: str
    role_id: str | None = None
    stage: PipelineStage = "screening"
    entered_stage_at: datetime | None = None
    time_in_pipe_days: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def applies_to(self, candidate_id: str, role_id: str) -> bool:
        if self.candidate_id != candidate_id:
            return False
        return self.role_id is None or self.role_id == role_id
