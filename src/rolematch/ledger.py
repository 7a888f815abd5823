"""Reservation ledger enforcing one active assignment per candidate."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Iterable

import pendulum
import structlog

from .errors import ReservationConflict
from .schemas import Reservation


class ReservationLedger:
    """Active reservations keyed by candidate.

    ``commit`` performs its read-check-write under a lock, so two concurrent
    commits for one candidate against different roles cannot both succeed.
    """

    def __init__(
        self,
        reservations: Iterable[Reservation] = (),
        *,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._active: dict[str, Reservation] = {}
        self._now_provider: Callable[[], Any] = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)
        self.restore(reservations)

    def commit(
        self,
        candidate_id: str,
        role_id: str,
        actor: str,
        now: datetime | None = None,
    ) -> Reservation:
        return self.reserve(candidate_id, role_id, actor, now)[0]

    def reserve(
        self,
        candidate_id: str,
        role_id: str,
        actor: str,
        now: datetime | None = None,
    ) -> tuple[Reservation, bool]:
        """Like ``commit``, also reporting whether a new reservation was created."""
        with self._lock:
            existing = self._active.get(candidate_id)
            if existing is not None:
                if existing.role_id != role_id:
                    self._logger.info(
                        "reservation.conflict",
                        candidate_id=candidate_id,
                        role_id=role_id,
                        existing_role_id=existing.role_id,
                    )
                    raise ReservationConflict(candidate_id, role_id, existing.role_id)
                return existing, False

            reservation = Reservation(
                candidate_id=candidate_id,
                role_id=role_id,
                reserved_at=now or self._now_provider(),
                reserved_by=actor,
            )
            self._active[candidate_id] = reservation

        self._logger.info(
            "reservation.committed",
            candidate_id=candidate_id,
            role_id=role_id,
            actor=actor,
        )
        return reservation, True

    def release(self, candidate_id: str, role_id: str) -> bool:
        """Drop the reservation if present; returns whether anything changed."""
        with self._lock:
            existing = self._active.get(candidate_id)
            if existing is None or existing.role_id != role_id:
                return False
            del self._active[candidate_id]

        self._logger.info("reservation.released", candidate_id=candidate_id, role_id=role_id)
        return True

    def get(self, candidate_id: str) -> Reservation | None:
        with self._lock:
            return self._active.get(candidate_id)

    def reservations(self) -> list[Reservation]:
        with self._lock:
            return list(self._active.values())

    def restore(self, reservations: Iterable[Reservation]) -> None:
        """Replace ledger contents; rejects snapshots that break exclusivity."""
        restored: dict[str, Reservation] = {}
        for reservation in reservations:
            previous = restored.get(reservation.candidate_id)
            if previous is not None and previous.role_id != reservation.role_id:
                raise ReservationConflict(
                    reservation.candidate_id, reservation.role_id, previous.role_id
                )
            restored.setdefault(reservation.candidate_id, reservation)
        with self._lock:
            self._active = restored

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)

    def __contains__(self, candidate_id: object) -> bool:
        with self._lock:
            return candidate_id in self._active
