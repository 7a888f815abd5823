"""Key tool coverage."""

from __future__ import annotations

from ...schemas import Candidate, Interview, Role
from .base import ComponentScore, fold


class ToolsScorer:
    """Fraction of the role's key tools the candidate already uses."""

    component = "tools"

    def score(
        self,
        candidate: Candidate,
        role: Role,
        interview: Interview | None = None,
    ) -> ComponentScore:
        role_tools = fold(role.tools_top5)
        if not role_tools:
            return ComponentScore(score=0.0)

        candidate_tools = set(fold(candidate.tools))
        matched = [tool for tool in role_tools if tool in candidate_tools]
        return ComponentScore(
            score=len(matched) / len(role_tools),
            evidence=[f"Tool match: {tool}" for tool in matched],
        )
