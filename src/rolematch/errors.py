"""Exception types raised by the allocation engine."""

from __future__ import annotations


class AllocationError(Exception):
    """Base class for recoverable allocation failures."""


class ConfigurationError(AllocationError, ValueError):
    """Raised when a role's scoring contract is malformed."""


class ReservationConflict(AllocationError):
    """Raised when a candidate is already reserved for a different role."""

    def __init__(self, candidate_id: str, role_id: str, existing_role_id: str):
        super().__init__(
            f"Candidate {candidate_id!r} is already reserved for role {existing_role_id!r}"
        )
        self.candidate_id = candidate_id
        self.role_id = role_id
        self.existing_role_id = existing_role_id


class BatchNotFound(AllocationError, KeyError):
    """Raised when a batch identity is unknown."""

    def __init__(self, batch_id: str):
        super().__init__(batch_id)
        self.batch_id = batch_id

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Unknown batch: {self.batch_id!r}"


class UnknownRecord(AllocationError, KeyError):
    """Raised when a candidate or role identity is not in the current state."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(record_id)
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Unknown {self.kind}: {self.record_id!r}"
