from __future__ import annotations

from typing import Any

from rolematch.core import MatchScorer, Ranker
from rolematch.schemas import Candidate, Interview, MatchScore, PipelineEntry, Role


class TableScorer:
    """Returns fixed totals keyed by (candidate_id, role_id)."""

    def __init__(self, totals: dict[tuple[str, str], int], failing: set[tuple[str, str]] | None = None):
        self._totals = totals
        self._failing = failing or set()
        self.interviews: list[Interview | None] = []

    def score(self, candidate: Candidate, role: Role, interview: Interview | None = None) -> MatchScore:
        self.interviews.append(interview)
        key = (candidate.candidate_id, role.role_id)
        if key in self._failing:
            return MatchScore.rejected(*key, ["Missing required language: en"])
        return MatchScore(candidate_id=key[0], role_id=key[1], total_score=self._totals.get(key, 0))


def candidates(*ids: str) -> list[Candidate]:
    return [Candidate(candidate_id=cid, name=cid) for cid in ids]


def build_role(role_id: str = "R-1", **kwargs: Any) -> Role:
    return Role(role_id=role_id, **kwargs)


def test_top_matches_for_role_orders_and_limits():
    scorer = TableScorer({("C-1", "R-1"): 90, ("C-2", "R-1"): 75, ("C-3", "R-1"): 75})
    ranker = Ranker(scorer)  # type: ignore[arg-type]

    top = ranker.top_matches_for_role(build_role(), candidates("C-3", "C-2", "C-1"), limit=2)

    assert [(m.candidate_id, m.total_score) for m in top] == [("C-1", 90), ("C-2", 75)]


def test_role_ties_prefer_longest_waiting_candidate():
    scorer = TableScorer({("C-1", "R-1"): 90, ("C-2", "R-1"): 75, ("C-3", "R-1"): 75})
    pipeline = [
        PipelineEntry(candidate_id="C-2", role_id="R-1", time_in_pipe_days=10),
        PipelineEntry(candidate_id="C-3", time_in_pipe_days=40),
    ]

    top = Ranker(scorer).top_matches_for_role(  # type: ignore[arg-type]
        build_role(), candidates("C-1", "C-2", "C-3"), pipeline=pipeline, limit=2
    )

    assert [m.candidate_id for m in top] == ["C-1", "C-3"]


def test_constraint_failures_are_dropped():
    scorer = TableScorer(
        {("C-1", "R-1"): 50, ("C-2", "R-1"): 99},
        failing={("C-2", "R-1")},
    )

    top = Ranker(scorer).top_matches_for_role(build_role(), candidates("C-1", "C-2"))  # type: ignore[arg-type]

    assert [m.candidate_id for m in top] == ["C-1"]
    assert all(m.passed_constraints for m in top)


def test_top_matches_for_candidate_prefers_older_role_on_tie():
    scorer = TableScorer({("C-1", "R-new"): 80, ("C-1", "R-old"): 80, ("C-1", "R-top"): 95})
    roles = [
        build_role("R-new", age_days=5),
        build_role("R-old", age_days=30),
        build_role("R-top", age_days=1),
    ]

    top = Ranker(scorer).top_matches_for_candidate(candidates("C-1")[0], roles)  # type: ignore[arg-type]

    assert [m.role_id for m in top] == ["R-top", "R-old", "R-new"]


def test_interview_lookup_requires_exact_pair():
    scorer = TableScorer({})
    matching = Interview(
        candidate_id="C-1",
        role_id="R-1",
        panel_scores={"technical": 4, "communication": 4, "business": 4},
    )
    other_role = matching.model_copy(update={"role_id": "R-2"})

    Ranker(scorer).top_matches_for_role(  # type: ignore[arg-type]
        build_role(), candidates("C-1", "C-2"), interviews=[other_role, matching]
    )

    assert scorer.interviews == [matching, None]


def test_default_and_zero_limits():
    scorer = TableScorer({(f"C-{i}", "R-1"): i for i in range(5)})
    population = candidates(*(f"C-{i}" for i in range(5)))

    assert len(Ranker(scorer).top_matches_for_role(build_role(), population)) == 3  # type: ignore[arg-type]
    assert Ranker(scorer, default_limit=4).default_limit == 4  # type: ignore[arg-type]
    assert Ranker(scorer).top_matches_for_role(build_role(), population, limit=0) == []  # type: ignore[arg-type]


def test_shortlist_by_role_concatenates_per_role_results():
    scorer = TableScorer(
        {("C-1", "R-1"): 60, ("C-2", "R-1"): 70, ("C-1", "R-2"): 80, ("C-2", "R-2"): 50}
    )

    shortlist = Ranker(scorer).shortlist_by_role(  # type: ignore[arg-type]
        [build_role("R-1"), build_role("R-2")], candidates("C-1", "C-2"), limit=1
    )

    assert [(m.role_id, m.candidate_id) for m in shortlist] == [("R-1", "C-2"), ("R-2", "C-1")]


def test_ranker_with_real_scorer_filters_language_failures():
    role = Role(
        role_id="R-1",
        country="Brazil",
        leveling_must_haves=["sql"],
        languages_required=[{"code": "en", "min": "B2"}],
    )
    population = [
        Candidate(candidate_id="C-1", country="Brazil", skills=["sql"], languages=[{"code": "en", "level": "C1"}]),
        Candidate(candidate_id="C-2", country="Brazil", skills=["sql"], languages=[{"code": "pt", "level": "C2"}]),
    ]

    top = Ranker(MatchScorer()).top_matches_for_role(role, population)

    assert [m.candidate_id for m in top] == ["C-1"]
