"""Candidate-to-role matching and allocation engine."""

from __future__ import annotations

__version__ = "0.1.0"

from .batches import BatchCoordinator
from .core import ConstraintEvaluator, MatchScorer, Ranker
from .errors import (
    AllocationError,
    BatchNotFound,
    ConfigurationError,
    ReservationConflict,
    UnknownRecord,
)
from .events import AllocationEvent, EventBus
from .ledger import ReservationLedger
from .service import AllocationService

__all__ = [
    "__version__",
    "AllocationError",
    "AllocationEvent",
    "AllocationService",
    "BatchCoordinator",
    "BatchNotFound",
    "ConfigurationError",
    "ConstraintEvaluator",
    "EventBus",
    "MatchScorer",
    "Ranker",
    "ReservationConflict",
    "ReservationLedger",
    "UnknownRecord",
]
