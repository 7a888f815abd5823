from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rolematch.cli import app
from rolematch.repository import JsonStateRepository
from rolematch.schemas import AllocationState


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def state_path(tmp_path: Path, state: AllocationState) -> Path:
    path = tmp_path / "state.json"
    JsonStateRepository(path).save(state)
    return path


def test_rank_role_prints_json(runner: CliRunner, state_path: Path) -> None:
    result = runner.invoke(app, ["rank-role", "R-001", "--state", str(state_path)])

    assert result.exit_code == 0, result.output
    matches = json.loads(result.stdout)
    assert [m["candidate_id"] for m in matches] == ["C-001", "C-002"]
    assert matches[0]["passed_constraints"] is True
    assert set(matches[0]["breakdown"]) == {"leveling", "function_skills", "tools", "background_fit"}


def test_rank_role_unknown_role_fails(runner: CliRunner, state_path: Path) -> None:
    result = runner.invoke(app, ["rank-role", "R-404", "--state", str(state_path)])

    assert result.exit_code == 1


def test_rank_candidate_honours_limit(runner: CliRunner, state_path: Path) -> None:
    result = runner.invoke(
        app, ["rank-candidate", "C-001", "--state", str(state_path), "--limit", "1"]
    )

    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)) == 1


def test_reserve_conflict_then_release(runner: CliRunner, state_path: Path) -> None:
    first = runner.invoke(app, ["reserve", "C-001", "R-001", "--state", str(state_path)])
    assert first.exit_code == 0, first.output
    assert "Reserved C-001 for R-001." in first.output

    conflict = runner.invoke(app, ["reserve", "C-001", "R-002", "--state", str(state_path)])
    assert conflict.exit_code == 2
    assert "Conflict: C-001 is already reserved for R-001." in conflict.output

    released = runner.invoke(app, ["release", "C-001", "R-001", "--state", str(state_path)])
    assert released.exit_code == 0
    assert "Released." in released.output

    again = runner.invoke(app, ["reserve", "C-001", "R-002", "--state", str(state_path)])
    assert again.exit_code == 0, again.output

    saved = JsonStateRepository(state_path).load()
    assert [(r.candidate_id, r.role_id) for r in saved.reservations] == [("C-001", "R-002")]


def test_batch_then_send(runner: CliRunner, state_path: Path) -> None:
    created = runner.invoke(app, ["batch", "--state", str(state_path)])
    assert created.exit_code == 0, created.output
    assert "with 4 matches" in created.output

    sent = runner.invoke(app, ["send", "--state", str(state_path)])
    assert sent.exit_code == 0, sent.output

    saved = JsonStateRepository(state_path).load()
    assert len(saved.batches) == 1
    assert saved.batches[0].sent_at is not None
    assert saved.current_batch_id == saved.batches[0].batch_id


def test_send_unknown_batch_fails(runner: CliRunner, state_path: Path) -> None:
    result = runner.invoke(app, ["send", "--state", str(state_path), "--batch-id", "missing"])

    assert result.exit_code == 1


def test_shortlist_rejects_unknown_view(runner: CliRunner, state_path: Path) -> None:
    result = runner.invoke(app, ["shortlist", "--state", str(state_path), "--view", "by-team"])

    assert result.exit_code == 2
    assert "'--view'" in result.output


def test_export_writes_csv(runner: CliRunner, state_path: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "shortlist.csv"

    result = runner.invoke(app, ["export", "--state", str(state_path), "--output", str(output)])

    assert result.exit_code == 0, result.output
    with output.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["Role", "Candidate", "Score"]
    assert len(rows) == 5
    assert rows[1][:2] == ["Senior Data Engineer", "Ana Souza"]


def test_invalid_state_file_is_reported(runner: CliRunner, tmp_path: Path) -> None:
    state_path = tmp_path / "state.json"
    state_path.write_text("[]", encoding="utf-8")

    result = runner.invoke(app, ["rank-role", "R-001", "--state", str(state_path)])

    assert result.exit_code == 2
    assert "'--state'" in result.output


def test_config_file_overrides_limit(runner: CliRunner, state_path: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "engine.yaml"
    config_path.write_text("engine:\n  default_limit: 1\n", encoding="utf-8")

    result = runner.invoke(
        app, ["rank-role", "R-001", "--state", str(state_path), "--config", str(config_path)]
    )

    assert result.exit_code == 0, result.output
    assert [m["candidate_id"] for m in json.loads(result.stdout)] == ["C-001"]


def test_dangling_current_batch_is_reported(
    runner: CliRunner, state_path: Path
) -> None:
    payload = json.loads(state_path.read_text(encoding="utf-8"))
    payload["current_batch_id"] = "batch_missing"
    state_path.write_text(json.dumps(payload), encoding="utf-8")

    result = runner.invoke(app, ["rank-role", "R-001", "--state", str(state_path)])

    assert result.exit_code == 2
    assert "'--state'" in result.output


def test_conflicting_stored_reservations_are_reported(
    runner: CliRunner, state_path: Path
) -> None:
    payload = json.loads(state_path.read_text(encoding="utf-8"))
    payload["reservations"] = [
        {
            "candidate_id": "C-001",
            "role_id": role_id,
            "reserved_at": "2025-03-03T09:00:00+00:00",
            "reserved_by": "manager",
        }
        for role_id in ("R-001", "R-002")
    ]
    state_path.write_text(json.dumps(payload), encoding="utf-8")

    result = runner.invoke(app, ["reserve", "C-002", "R-001", "--state", str(state_path)])

    assert result.exit_code == 2
    assert "'--state'" in result.output
