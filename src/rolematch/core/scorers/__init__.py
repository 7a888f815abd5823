"""Component scorers combined by the match aggregator."""

from .base import ComponentScore
from .leveling import LevelingScorer
from .function_skills import FunctionSkillsScorer
from .tools import ToolsScorer
from .background import BackgroundFitScorer

__all__ = [
    "ComponentScore",
    "LevelingScorer",
    "FunctionSkillsScorer",
    "ToolsScorer",
    "BackgroundFitScorer",
]
