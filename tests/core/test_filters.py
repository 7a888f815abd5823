from __future__ import annotations

import pendulum
import pytest
from pydantic import ValidationError

from rolematch.filters import MatchFilters, starts_within_buffer
from rolematch.schemas import Candidate, PipelineEntry, Role


def build_role(**kwargs) -> Role:
    base = {
        "role_id": "R-1",
        "country": "Brazil",
        "function": "Data",
        "target_levels": ["L5"],
        "languages_required": [{"code": "en", "min": "B2"}],
        "age_days": 10,
    }
    base.update(kwargs)
    return Role(**base)


def test_role_filters_combine():
    roles = [
        build_role(),
        build_role(role_id="R-2", country="Mexico"),
        build_role(role_id="R-3", function="Finance"),
        build_role(role_id="R-4", target_levels=["L6"]),
        build_role(role_id="R-5", languages_required=[]),
        build_role(role_id="R-6", age_days=60),
    ]

    narrowed = MatchFilters(country="Brazil", function="Data", level="L5", language="en")

    assert len(MatchFilters().apply_to_roles(roles)) == 6
    assert [r.role_id for r in narrowed.apply_to_roles(roles)] == ["R-1", "R-6"]
    assert [r.role_id for r in MatchFilters(old_role=30).apply_to_roles(roles)] == ["R-6"]


def test_candidate_filters_use_pipeline_time():
    candidates = [
        Candidate(candidate_id="C-1", country="Brazil", languages=[{"code": "en", "level": "C1"}]),
        Candidate(candidate_id="C-2", country="Brazil"),
        Candidate(candidate_id="C-3", country="Mexico", languages=[{"code": "en", "level": "B2"}]),
    ]
    pipeline = [
        PipelineEntry(candidate_id="C-1", time_in_pipe_days=40),
        PipelineEntry(candidate_id="C-3", time_in_pipe_days=5),
    ]

    by_language = MatchFilters(language="en").apply_to_candidates(candidates, pipeline)
    stale = MatchFilters(stale_in_pipe=30).apply_to_candidates(candidates, pipeline)
    brazil = MatchFilters(country="Brazil").apply_to_candidates(candidates)

    assert [c.candidate_id for c in by_language] == ["C-1", "C-3"]
    assert [c.candidate_id for c in stale] == ["C-1"]
    assert [c.candidate_id for c in brazil] == ["C-1", "C-2"]


def test_filters_reject_unknown_fields():
    with pytest.raises(ValidationError):
        MatchFilters(team="platform")


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (None, False),
        (pendulum.date(2025, 3, 10), True),
        (pendulum.date(2025, 3, 31), True),
        (pendulum.date(2025, 4, 1), False),
    ],
)
def test_starts_within_buffer(start, expected):
    role = build_role(start_preference=start)

    assert starts_within_buffer(role, pendulum.date(2025, 3, 2)) is expected
