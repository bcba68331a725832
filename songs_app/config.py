from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, field_validator

StorageFormat = Literal["xml", "json", "yaml"]


class StorageSettings(BaseModel):
    format: StorageFormat = "xml"
    data_dir: Path = Path(".")
    songs_file: str = "songs"
    artists_file: str = "artists"

    @field_validator("format", mode="before")
    @classmethod
    def _normalise_format(cls, value: str) -> str:
        value = str(value).strip().lower()
        return "yaml" if value == "yml" else value

    @field_validator("data_dir", mode="before")
    @classmethod
    def _expand_data_dir(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()


class LoggingSettings(BaseModel):
    level: str = "WARNING"
    debug_log: Optional[Path] = Path("songs-app-debug.log")

    @field_validator("debug_log", mode="before")
    @classmethod
    def _expand_log(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser().resolve()


class Settings(BaseModel):
    storage: StorageSettings = StorageSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        return cls.model_validate(raw)


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    """Return the config file to use, or None to run with defaults."""
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file {explicit_path} does not exist")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "songs-app.yaml", cwd / "songs-app.yml"):
        if candidate.exists():
            return candidate
    return None


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    config_path = find_config(explicit_path)
    if config_path is None:
        return Settings()
    return Settings.load(config_path)
