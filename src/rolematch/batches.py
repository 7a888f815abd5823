"""Immutable batches of ranked matches and the working shortlist."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Callable, Iterable

import pendulum
import structlog

from .errors import BatchNotFound
from .schemas import Batch, MatchScore


class BatchCoordinator:
    """Snapshots ranked matches for approval.

    The current batch is never mutated once created. The working ``shortlist``
    is the current batch minus every match that pairs a withdrawn candidate with
    a role other than the one they are held for. Withdrawals outlive batch
    changes, so a batch created after a reservation is pruned the same way.
    """

    def __init__(
        self,
        batches: Iterable[Batch] = (),
        *,
        current_batch_id: str | None = None,
        now_provider: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._now_provider: Callable[[], Any] = now_provider or pendulum.now
        self._id_factory = id_factory or _new_batch_id
        self._logger = structlog.get_logger(__name__)
        self.restore(batches, current_batch_id=current_batch_id)

    def restore(self, batches: Iterable[Batch], *, current_batch_id: str | None = None) -> None:
        """Replace stored batches and clear withdrawals."""
        self._batches: list[Batch] = list(batches)
        self._current_id: str | None = None
        self._withdrawn: dict[str, str] = {}
        if current_batch_id is not None:
            self._current_id = self.get(current_batch_id).batch_id

    @property
    def batches(self) -> list[Batch]:
        return list(self._batches)

    @property
    def current(self) -> Batch | None:
        if self._current_id is None:
            return None
        return self.get(self._current_id)

    @property
    def shortlist(self) -> list[MatchScore]:
        current = self.current
        if current is None:
            return []
        return [
            match
            for match in current.matches
            if self._withdrawn.get(match.candidate_id, match.role_id) == match.role_id
        ]

    def get(self, batch_id: str) -> Batch:
        for batch in self._batches:
            if batch.batch_id == batch_id:
                return batch
        raise BatchNotFound(batch_id)

    def create_batch(self, matches: Iterable[MatchScore]) -> Batch:
        batch = Batch(
            batch_id=self._id_factory(),
            created_at=self._now_provider(),
            matches=tuple(matches),
        )
        self._batches.append(batch)
        self._current_id = batch.batch_id
        self._logger.info("batch.created", batch_id=batch.batch_id, matches=len(batch.matches))
        return batch

    def send_batch(self, batch_id: str) -> Batch:
        for index, batch in enumerate(self._batches):
            if batch.batch_id != batch_id:
                continue
            if batch.is_sent:
                return batch
            sent = batch.model_copy(update={"sent_at": self._now_provider()})
            self._batches[index] = sent
            self._logger.info("batch.sent", batch_id=batch_id, matches=len(sent.matches))
            return sent
        raise BatchNotFound(batch_id)

    def withdraw_candidate(self, candidate_id: str, keep_role_id: str) -> list[MatchScore]:
        """Remove the candidate from every competing role on the shortlist."""
        self._withdrawn[candidate_id] = keep_role_id
        shortlist = self.shortlist
        self._logger.debug(
            "batch.shortlist_pruned",
            candidate_id=candidate_id,
            kept_role_id=keep_role_id,
            remaining=len(shortlist),
        )
        return shortlist

    def reinstate_candidate(self, candidate_id: str) -> list[MatchScore]:
        """Undo ``withdraw_candidate`` once the candidate's reservation is released."""
        if self._withdrawn.pop(candidate_id, None) is not None:
            self._logger.debug("batch.shortlist_reinstated", candidate_id=candidate_id)
        return self.shortlist

    def matches_for_role(self, role_id: str, limit: int = 3) -> list[MatchScore]:
        ranked = sorted(
            (m for m in self.shortlist if m.role_id == role_id and m.passed_constraints),
            key=lambda m: -m.total_score,
        )
        return ranked[:limit]


def _new_batch_id() -> str:
    return f"batch_{uuid.uuid4().hex[:12]}"
