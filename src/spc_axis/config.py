from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

LabelLocale = Literal["da", "en"]


class TimeConfig(BaseModel):
    timezone: str = "Europe/Copenhagen"
    week_start: Literal["sunday", "monday"] = "sunday"
    parse_date_strings: bool = False


class BreaksConfig(BaseModel):
    max_breaks: int = Field(default=15, ge=2)
    numeric_target: int = Field(default=8, ge=2)
    calendar_breaks_for_coarse_types: bool = True


class LabelsConfig(BaseModel):
    locale: LabelLocale = "da"


class AxisConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    time: TimeConfig = Field(default_factory=TimeConfig)
    breaks: BreaksConfig = Field(default_factory=BreaksConfig)
    labels: LabelsConfig = Field(default_factory=LabelsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path) -> AxisConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AxisConfig.model_validate(data)

    env_locale = os.getenv("SPC_AXIS_LOCALE")
    if env_locale:
        config.labels = LabelsConfig.model_validate({"locale": env_locale.strip().lower()})
    return config
