"""Top-N selection of matches for a role or for a candidate."""

from __future__ import annotations

from typing import Iterable, Sequence

import structlog

from ..schemas import Candidate, Interview, MatchScore, PipelineEntry, Role
from .aggregator import MatchScorer


class Ranker:
    """Scores every counterpart, drops constraint failures and keeps the best N.

    Ties on total score are broken deterministically: for a candidate the older
    role (higher ``age_days``) wins, then ``role_id``; for a role the candidate who
    has waited longest in the pipeline wins, then ``candidate_id``.
    """

    DEFAULT_LIMIT = 3

    def __init__(self, scorer: MatchScorer, *, default_limit: int | None = None) -> None:
        self._scorer = scorer
        self._default_limit = default_limit or self.DEFAULT_LIMIT
        self._logger = structlog.get_logger(__name__)

    @property
    def default_limit(self) -> int:
        return self._default_limit

    def top_matches_for_role(
        self,
        role: Role,
        candidates: Iterable[Candidate],
        interviews: Sequence[Interview] = (),
        pipeline: Sequence[PipelineEntry] = (),
        limit: int | None = None,
    ) -> list[MatchScore]:
        scored: list[tuple[MatchScore, int]] = []
        evaluated = 0
        for candidate in candidates:
            evaluated += 1
            match = self._scorer.score(
                candidate, role, find_interview(interviews, candidate.candidate_id, role.role_id)
            )
            if not match.passed_constraints:
                continue
            entry = find_pipeline_entry(pipeline, candidate.candidate_id, role.role_id)
            scored.append((match, entry.time_in_pipe_days if entry else 0))

        scored.sort(key=lambda item: (-item[0].total_score, -item[1], item[0].candidate_id))
        top = [match for match, _ in scored[: self._resolve_limit(limit)]]
        self._logger.debug(
            "ranking.role",
            role_id=role.role_id,
            evaluated=evaluated,
            passed=len(scored),
            returned=len(top),
        )
        return top

    def top_matches_for_candidate(
        self,
        candidate: Candidate,
        roles: Iterable[Role],
        interviews: Sequence[Interview] = (),
        pipeline: Sequence[PipelineEntry] = (),
        limit: int | None = None,
    ) -> list[MatchScore]:
        scored: list[tuple[MatchScore, int]] = []
        evaluated = 0
        for role in roles:
            evaluated += 1
            match = self._scorer.score(
                candidate, role, find_interview(interviews, candidate.candidate_id, role.role_id)
            )
            if match.passed_constraints:
                scored.append((match, role.age_days))

        scored.sort(key=lambda item: (-item[0].total_score, -item[1], item[0].role_id))
        top = [match for match, _ in scored[: self._resolve_limit(limit)]]
        self._logger.debug(
            "ranking.candidate",
            candidate_id=candidate.candidate_id,
            evaluated=evaluated,
            passed=len(scored),
            returned=len(top),
        )
        return top

    def shortlist_by_role(
        self,
        roles: Iterable[Role],
        candidates: Sequence[Candidate],
        interviews: Sequence[Interview] = (),
        pipeline: Sequence[PipelineEntry] = (),
        limit: int | None = None,
    ) -> list[MatchScore]:
        shortlist: list[MatchScore] = []
        for role in roles:
            shortlist.extend(
                self.top_matches_for_role(role, candidates, interviews, pipeline, limit)
            )
        return shortlist

    def shortlist_by_candidate(
        self,
        candidates: Iterable[Candidate],
        roles: Sequence[Role],
        interviews: Sequence[Interview] = (),
        pipeline: Sequence[PipelineEntry] = (),
        limit: int | None = None,
    ) -> list[MatchScore]:
        shortlist: list[MatchScore] = []
        for candidate in candidates:
            shortlist.extend(
                self.top_matches_for_candidate(candidate, roles, interviews, pipeline, limit)
            )
        return shortlist

    def _resolve_limit(self, limit: int | None) -> int:
        return self._default_limit if limit is None else max(limit, 0)


def find_interview(
    interviews: Iterable[Interview],
    candidate_id: str,
    role_id: str,
) -> Interview | None:
    for interview in interviews:
        if interview.candidate_id == candidate_id and interview.role_id == role_id:
            return interview
    return None


def find_pipeline_entry(
    pipeline: Iterable[PipelineEntry],
    candidate_id: str,
    role_id: str,
) -> PipelineEntry | None:
    for entry in pipeline:
        if entry.applies_to(candidate_id, role_id):
            return entry
    return None
