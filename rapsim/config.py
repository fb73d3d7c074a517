"""Configuration management for the career simulation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


@dataclass
class EngineSettings:
    """Tuning knobs for the weekly engine."""
    market_trend_chance: float = 0.15
    random_event_chance: float = 0.05
    controversy_max_percent: float = 5.0
    feature_request_cap: float = 0.2
    request_expiry_weeks: int = 4
    viral_duration_weeks: int = 2
    max_energy: int = 100
    monthly_listener_cap: int = 250_000_000


@dataclass
class StorageSettings:
    """Where save slots are written."""
    save_dir: str = "data/saves"
    save_dir_env_var: str = "RAPSIM_SAVE_DIR"

    @property
    def path(self) -> Path:
        override = os.environ.get(self.save_dir_env_var)
        path = Path(override or self.save_dir)
        if not path.is_absolute():
            path = Path(__file__).parent.parent / path
        return path


@dataclass
class Settings:
    """Application settings."""
    engine: EngineSettings = field(default_factory=EngineSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from YAML configuration file."""
    if config_path is None:
        env_path = os.environ.get("RAPSIM_SETTINGS_PATH")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return Settings()

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    engine_data = data.get("engine", {}) or {}
    storage_data = data.get("storage", {}) or {}

    return Settings(
        engine=EngineSettings(**engine_data),
        storage=StorageSettings(**storage_data),
    )


# Global settings instance
settings = load_settings()
