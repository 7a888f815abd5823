"""Dependency injection container for the allocation engine."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from .batches import BatchCoordinator
from .core import (
    BackgroundFitScorer,
    ConstraintConfig,
    ConstraintEvaluator,
    FunctionSkillsScorer,
    LevelingScorer,
    MatchScorer,
    Ranker,
    ToolsScorer,
)
from .core.scorers.background import BackgroundFitConfig
from .core.scorers.function_skills import FunctionSkillsConfig
from .core.scorers.leveling import LevelingConfig
from .events import EventBus
from .ledger import ReservationLedger
from .repository import JsonStateRepository
from .service import AllocationService


class AllocationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    leveling_scorer = providers.Singleton(LevelingScorer)
    function_skills_scorer = providers.Singleton(FunctionSkillsScorer)
    tools_scorer = providers.Singleton(ToolsScorer)
    background_fit_scorer = providers.Singleton(BackgroundFitScorer)

    scorers = providers.List(
        leveling_scorer,
        function_skills_scorer,
        tools_scorer,
        background_fit_scorer,
    )

    constraint_evaluator = providers.Singleton(ConstraintEvaluator)

    match_scorer = providers.Singleton(
        MatchScorer,
        scorers=scorers,
        constraints=constraint_evaluator,
        evidence_limit=config.evidence_limit,
    )

    ranker = providers.Singleton(
        Ranker,
        scorer=match_scorer,
        default_limit=config.default_limit,
    )

    event_bus = providers.Singleton(EventBus)
    ledger = providers.Singleton(ReservationLedger)
    coordinator = providers.Singleton(BatchCoordinator)
    repository = providers.Object(None)

    service = providers.Singleton(
        AllocationService,
        ranker=ranker,
        ledger=ledger,
        coordinator=coordinator,
        bus=event_bus,
        repository=repository,
    )


def create_container(
    *,
    settings: dict | None = None,
    state_path: str | Path | None = None,
) -> AllocationContainer:
    """Instantiate container with optional overrides."""

    container = AllocationContainer()

    if state_path is not None:
        container.repository.override(
            providers.Singleton(JsonStateRepository, path=Path(state_path))
        )

    if not settings:
        return container

    engine_settings = settings.get("engine", {}) if isinstance(settings, dict) else {}
    if engine_settings:
        container.config.override(engine_settings)

    scorer_settings = settings.get("scorers", {}) if isinstance(settings, dict) else {}

    if "leveling" in scorer_settings:
        leveling_config = LevelingConfig(**scorer_settings["leveling"])
        container.leveling_scorer.override(
            providers.Singleton(LevelingScorer, config=leveling_config)
        )

    if "function_skills" in scorer_settings:
        function_config = FunctionSkillsConfig(**scorer_settings["function_skills"])
        container.function_skills_scorer.override(
            providers.Singleton(FunctionSkillsScorer, config=function_config)
        )

    if "background_fit" in scorer_settings:
        background_config = BackgroundFitConfig(**scorer_settings["background_fit"])
        container.background_fit_scorer.override(
            providers.Singleton(BackgroundFitScorer, config=background_config)
        )

    constraint_settings = settings.get("constraints") if isinstance(settings, dict) else None
    if constraint_settings:
        constraint_config = ConstraintConfig(
            location_bound_models=tuple(constraint_settings.get("location_bound_models", ("On-site",)))
        )
        container.constraint_evaluator.override(
            providers.Singleton(ConstraintEvaluator, config=constraint_config)
        )

    return container
