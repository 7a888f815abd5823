"""Persistence of allocation state as flat JSON record lists."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from pydantic import ValidationError

from .schemas import AllocationState, Candidate, MatchScore, Role


class StateLoadError(ValueError):
    """Raised when a state document cannot be parsed."""

    def __init__(self, errors: list[str]):
        super().__init__("State loading failed")
        self.errors = errors

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"State loading failed: {self.errors}"


@runtime_checkable
class StateRepository(Protocol):
    """Storage contract injected into the allocation service."""

    def load(self) -> AllocationState:
        """Return the persisted state, or an empty one."""

    def save(self, state: AllocationState) -> None:
        """Persist the given state."""


class InMemoryStateRepository:
    """Keeps a serialized copy of the state in memory."""

    def __init__(self, state: AllocationState | None = None) -> None:
        self._payload = (state or AllocationState()).model_dump(mode="json")

    def load(self) -> AllocationState:
        return AllocationState.model_validate(self._payload)

    def save(self, state: AllocationState) -> None:
        self._payload = state.model_dump(mode="json")


class JsonStateRepository:
    """Reads and writes the state document at ``path``."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AllocationState:
        if not self._path.exists():
            return AllocationState()
        with self._path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise StateLoadError([f"invalid JSON ({exc})"]) from exc
        if not isinstance(data, dict):
            raise StateLoadError(["state document must be a JSON object"])
        try:
            return AllocationState.model_validate(data)
        except ValidationError as exc:
            raise StateLoadError(
                [
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                    for err in exc.errors()
                ]
            ) from exc

    def save(self, state: AllocationState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(state.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


def export_matches_csv(
    matches: Iterable[MatchScore],
    roles: Iterable[Role],
    candidates: Iterable[Candidate],
    path: str | Path,
) -> int:
    """Write ``Role,Candidate,Score`` rows; returns the number of rows written."""
    titles = {role.role_id: role.title for role in roles}
    names = {candidate.candidate_id: candidate.name for candidate in candidates}
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with target.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["Role", "Candidate", "Score"])
        for match in matches:
            writer.writerow(
                [titles.get(match.role_id, ""), names.get(match.candidate_id, ""), match.total_score]
            )
            rows += 1
    return rows
