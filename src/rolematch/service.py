"""Allocation service composing ranking, reservations, batches and storage."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Literal

import pendulum
import structlog

from .batches import BatchCoordinator
from .core import Ranker
from .errors import AllocationError, ReservationConflict, UnknownRecord
from .events import EventBus
from .filters import MatchFilters
from .ledger import ReservationLedger
from .repository import StateRepository
from .schemas import (
    AllocationState,
    Batch,
    Candidate,
    MatchScore,
    Rejection,
    Reservation,
    Role,
    ensure_scoring_contract,
)

ShortlistView = Literal["by-role", "by-candidate"]


class AllocationService:
    """Application shell around the matching engine.

    Holds the in-memory records, recomputes matches on every call and keeps the
    reservation ledger and batch shortlist consistent with each other.
    """

    def __init__(
        self,
        *,
        ranker: Ranker,
        ledger: ReservationLedger | None = None,
        coordinator: BatchCoordinator | None = None,
        bus: EventBus | None = None,
        repository: StateRepository | None = None,
        state: AllocationState | None = None,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._ranker = ranker
        self._now_provider: Callable[[], Any] = now_provider or pendulum.now
        self._ledger = (
            ledger if ledger is not None else ReservationLedger(now_provider=self._now_provider)
        )
        self._coordinator = (
            coordinator
            if coordinator is not None
            else BatchCoordinator(now_provider=self._now_provider)
        )
        self._bus = bus if bus is not None else EventBus(now_provider=self._now_provider)
        self._repository = repository
        self._logger = structlog.get_logger(__name__)
        if state is None:
            state = repository.load() if repository is not None else AllocationState()
        self._attach(state)

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def ledger(self) -> ReservationLedger:
        return self._ledger

    @property
    def coordinator(self) -> BatchCoordinator:
        return self._coordinator

    @property
    def shortlist(self) -> list[MatchScore]:
        return self._coordinator.shortlist

    # state -----------------------------------------------------------------

    def _attach(self, state: AllocationState) -> None:
        self._state = state
        self._ledger.restore(state.reservations)
        self._coordinator.restore(state.batches, current_batch_id=state.current_batch_id)
        for reservation in self._ledger.reservations():
            self._coordinator.withdraw_candidate(reservation.candidate_id, reservation.role_id)

    def snapshot(self) -> AllocationState:
        current = self._coordinator.current
        return self._state.model_copy(
            update={
                "batches": self._coordinator.batches,
                "current_batch_id": current.batch_id if current else None,
                "reservations": self._ledger.reservations(),
            }
        )

    def reload(self) -> AllocationState:
        if self._repository is None:
            raise AllocationError("No repository configured")
        self._attach(self._repository.load())
        return self._state

    def save(self) -> AllocationState:
        if self._repository is None:
            raise AllocationError("No repository configured")
        state = self.snapshot()
        self._repository.save(state)
        self._logger.info(
            "state.saved",
            candidates=len(state.candidates),
            roles=len(state.roles),
            batches=len(state.batches),
            reservations=len(state.reservations),
        )
        return state

    def candidate(self, candidate_id: str) -> Candidate:
        found = self._state.find_candidate(candidate_id)
        if found is None:
            raise UnknownRecord("candidate", candidate_id)
        return found

    def role(self, role_id: str) -> Role:
        found = self._state.find_role(role_id)
        if found is None:
            raise UnknownRecord("role", role_id)
        return found

    # intake ----------------------------------------------------------------

    def add_role(self, role: Role) -> Role:
        if self._state.find_role(role.role_id) is not None:
            raise AllocationError(f"Role {role.role_id!r} already exists")
        ensure_scoring_contract(role)
        self._state.roles.append(role)
        self._bus.publish("role.added", role_id=role.role_id)
        return role

    def update_role(self, role_id: str, **changes: Any) -> Role:
        current = self.role(role_id)
        updated = Role.model_validate({**current.model_dump(), **changes, "role_id": role_id})
        ensure_scoring_contract(updated)
        self._state.roles = [updated if r.role_id == role_id else r for r in self._state.roles]
        self._bus.publish("role.updated", role_id=role_id, fields=sorted(changes))
        return updated

    # ranking ---------------------------------------------------------------

    def top_matches_for_role(self, role_id: str, limit: int | None = None) -> list[MatchScore]:
        return self._ranker.top_matches_for_role(
            self.role(role_id),
            self._state.candidates,
            self._state.interviews,
            self._state.pipeline,
            limit,
        )

    def top_matches_for_candidate(
        self,
        candidate_id: str,
        limit: int | None = None,
    ) -> list[MatchScore]:
        return self._ranker.top_matches_for_candidate(
            self.candidate(candidate_id),
            self._state.roles,
            self._state.interviews,
            self._state.pipeline,
            limit,
        )

    def generate_shortlist(
        self,
        view: ShortlistView = "by-role",
        *,
        filters: MatchFilters | None = None,
        limit: int | None = None,
    ) -> list[MatchScore]:
        filters = filters or MatchFilters()
        state = self._state
        if view == "by-role":
            matches = self._ranker.shortlist_by_role(
                filters.apply_to_roles(state.roles),
                state.candidates,
                state.interviews,
                state.pipeline,
                limit,
            )
        elif view == "by-candidate":
            matches = self._ranker.shortlist_by_candidate(
                filters.apply_to_candidates(state.candidates, state.pipeline),
                state.roles,
                state.interviews,
                state.pipeline,
                limit,
            )
        else:
            raise ValueError(f"Unsupported shortlist view: {view!r}")
        self._logger.info("shortlist.generated", view=view, matches=len(matches))
        return matches

    # batches ---------------------------------------------------------------

    def create_batch(self, matches: Iterable[MatchScore] | None = None) -> Batch:
        if matches is None:
            matches = self.generate_shortlist()
        batch = self._coordinator.create_batch(m for m in matches if m.passed_constraints)
        self._bus.publish("batch.created", batch_id=batch.batch_id, matches=len(batch.matches))
        return batch

    def send_batch(self, batch_id: str | None = None) -> Batch:
        if batch_id is None:
            current = self._coordinator.current
            if current is None:
                matches = [m for m in self.generate_shortlist() if m.passed_constraints]
                if not matches:
                    raise AllocationError("No matches to send")
                current = self.create_batch(matches)
            batch_id = current.batch_id
        sent = self._coordinator.send_batch(batch_id)
        self._bus.publish("batch.sent", batch_id=sent.batch_id, matches=len(sent.matches))
        return sent

    # approvals -------------------------------------------------------------

    def select_candidate(self, candidate_id: str, role_id: str, actor: str) -> Reservation:
        """Reserve the candidate for the role and withdraw them from competing roles.

        Raises ``ReservationConflict`` when the candidate is held by another role;
        releasing that reservation first is the only way to override it.
        """
        self.candidate(candidate_id)
        self.role(role_id)
        try:
            reservation, created = self._ledger.reserve(candidate_id, role_id, actor)
        except ReservationConflict as exc:
            self._bus.publish(
                "reservation.conflict",
                candidate_id=candidate_id,
                role_id=role_id,
                existing_role_id=exc.existing_role_id,
            )
            raise
        self._coordinator.withdraw_candidate(candidate_id, role_id)
        if created:
            self._bus.publish(
                "reservation.committed",
                candidate_id=candidate_id,
                role_id=role_id,
                actor=actor,
            )
        return reservation

    def release(self, candidate_id: str, role_id: str) -> bool:
        released = self._ledger.release(candidate_id, role_id)
        if released:
            self._coordinator.reinstate_candidate(candidate_id)
            self._bus.publish("reservation.released", candidate_id=candidate_id, role_id=role_id)
        return released

    def reject(self, candidate_id: str, role_id: str, reason: str, actor: str) -> Rejection:
        rejection = Rejection(
            candidate_id=candidate_id,
            role_id=role_id,
            reason=reason,
            rejected_at=self._now_provider(),
            rejected_by=actor,
        )
        self._state.rejections.append(rejection)
        self._bus.publish(
            "candidate.rejected",
            candidate_id=candidate_id,
            role_id=role_id,
            reason=reason,
        )
        return rejection
