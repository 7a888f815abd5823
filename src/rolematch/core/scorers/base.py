"""Shared result type and helpers for component scorers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ComponentScore:
    """Normalized sub-score in [0, 1] with human-readable evidence."""

    score: float
    evidence: list[str] = field(default_factory=list)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, value))


def fold(values: list[str]) -> list[str]:
    return [value.lower() for value in values]


def mutual_substring(left: str, right: str) -> bool:
    """True when either lowercase string contains the other."""
    left_l, right_l = left.lower(), right.lower()
    return left_l in right_l or right_l in left_l


def format_number(value: float) -> str:
    """Render 5.0 as ``5`` and 4.5 as ``4.5``."""
    return f"{value:g}"
