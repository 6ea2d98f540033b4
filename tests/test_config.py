from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from spc_axis.config import AxisConfig, load_config


def test_axis_config_defaults() -> None:
    config = AxisConfig()

    assert config.time.timezone == "Europe/Copenhagen"
    assert config.time.week_start == "sunday"
    assert config.time.parse_date_strings is False
    assert config.breaks.max_breaks == 15
    assert config.breaks.numeric_target == 8
    assert config.breaks.calendar_breaks_for_coarse_types is True
    assert config.labels.locale == "da"


def test_load_config_reads_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SPC_AXIS_LOCALE", raising=False)
    config_data = {
        "time": {"week_start": "monday", "parse_date_strings": True},
        "breaks": {"max_breaks": 10},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config_data), encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.time.week_start == "monday"
    assert cfg.time.parse_date_strings is True
    assert cfg.breaks.max_breaks == 10
    assert cfg.labels.locale == "da"


def test_load_config_accepts_empty_file(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SPC_AXIS_LOCALE", raising=False)
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path) == AxisConfig()


def test_load_config_uses_env_locale(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"labels": {"locale": "da"}}), encoding="utf-8")

    monkeypatch.setenv("SPC_AXIS_LOCALE", "EN")
    assert load_config(config_path).labels.locale == "en"


def test_load_config_rejects_unknown_and_invalid_values(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("SPC_AXIS_LOCALE", raising=False)
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text(yaml.safe_dump({"render": {"dpi": 300}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(unknown)

    invalid = tmp_path / "invalid.yaml"
    invalid.write_text(yaml.safe_dump({"breaks": {"max_breaks": 1}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(invalid)


def test_default_config_file_matches_model_defaults(monkeypatch) -> None:
    monkeypatch.delenv("SPC_AXIS_LOCALE", raising=False)
    default_path = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"

    assert load_config(default_path) == AxisConfig()
