"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class EngineConfig(BaseModel):
    default_limit: int | None = Field(default=None, ge=1)
    evidence_limit: int | None = Field(default=None, ge=0)


class ScorerConfig(BaseModel):
    leveling: dict[str, Any] | None = None
    function_skills: dict[str, Any] | None = None
    background_fit: dict[str, Any] | None = None


class AppConfig(BaseModel):
    engine: EngineConfig = Field(default_factory=EngineConfig)
    scorers: ScorerConfig = Field(default_factory=ScorerConfig)
    constraints: dict[str, Any] | None = None

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        engine_settings = self.engine.model_dump(exclude_none=True)
        if engine_settings:
            settings["engine"] = engine_settings
        scorer_settings = self.scorers.model_dump(exclude_none=True)
        if scorer_settings:
            settings["scorers"] = scorer_settings
        if self.constraints:
            settings["constraints"] = dict(self.constraints)
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
