from __future__ import annotations

import pytest

from rolematch.schemas import AllocationState


def sample_state() -> AllocationState:
    weights = {"leveling": 0.45, "function_skills": 0.35, "tools": 0.10, "background_fit": 0.10}
    return AllocationState.model_validate(
        {
            "candidates": [
                {
                    "candidate_id": "C-001",
                    "name": "Ana Souza",
                    "origin": "internal",
                    "country": "Brazil",
                    "languages": [{"code": "en", "level": "C1"}, {"code": "pt", "level": "C2"}],
                    "experience_years_total": 8,
                    "experience_domains": ["Data Platform"],
                    "skills": ["sql", "python", "stakeholder management"],
                    "tools": ["dbt", "Snowflake"],
                    "internal_history": {
                        "function": "Data",
                        "tenure_months": 26,
                        "last_bu": "Data Platform",
                    },
                },
                {
                    "candidate_id": "C-002",
                    "name": "Luis Ortega",
                    "country": "Mexico",
                    "languages": [{"code": "en", "level": "B2"}, {"code": "es", "level": "C2"}],
                    "experience_years_total": 5,
                    "experience_domains": ["Analytics"],
                    "skills": ["sql", "tableau"],
                    "tools": ["Looker"],
                },
                {
                    "candidate_id": "C-003",
                    "name": "Joana Lima",
                    "country": "Brazil",
                    "languages": [{"code": "pt", "level": "C2"}],
                    "skills": ["sql", "python"],
                    "tools": ["dbt"],
                },
            ],
            "roles": [
                {
                    "role_id": "R-001",
                    "title": "Senior Data Engineer",
                    "function": "Data",
                    "subfunction": "Data Platform",
                    "country": "Brazil",
                    "work_model": "Hybrid",
                    "target_levels": ["L5"],
                    "languages_required": [{"code": "en", "min": "B2"}],
                    "leveling_must_haves": ["sql", "python"],
                    "preferred_skills": ["dbt"],
                    "tools_top5": ["dbt", "Snowflake"],
                    "weights": weights,
                    "age_days": 20,
                },
                {
                    "role_id": "R-002",
                    "title": "Analytics Lead",
                    "function": "Data",
                    "subfunction": "Analytics",
                    "country": "Mexico",
                    "work_model": "Remote",
                    "target_levels": ["L6"],
                    "languages_required": [{"code": "en", "min": "B2"}],
                    "leveling_must_haves": ["sql", "stakeholder_management"],
                    "tools_top5": ["Looker"],
                    "weights": weights,
                    "age_days": 45,
                },
            ],
            "pipeline": [
                {"candidate_id": "C-002", "time_in_pipe_days": 30},
            ],
        }
    )


@pytest.fixture
def state() -> AllocationState:
    return sample_state()
