"""Configuration loading and validation.

The YAML file is optional; every key has a default. Sections:

    paths:    logs_dir, catalog_path
    logging:  level, file_name
    scoring:  provider, delay_seconds
    export:   file_name, template_file_name
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError


DEFAULT_CONFIG_PATH = Path("config") / "shelfrank.yaml"


class PathsConfig(BaseModel):
    logs_dir: str = Field("logs", description="Directory for system and user logs")
    catalog_path: str = Field("data/catalog.json", description="Local catalog JSON file")


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file_name: str = "shelfrank.log"

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return str(v).upper() if v is not None else "INFO"


class ScoringConfig(BaseModel):
    provider: Literal["heuristic"] = Field("heuristic", description="Scoring provider name")
    delay_seconds: float = Field(0.0, ge=0, description="Artificial latency before scoring")


class ExportConfig(BaseModel):
    file_name: str = "productos_ordenados.csv"
    template_file_name: str = "template_productos.csv"


class AppConfig(BaseModel):
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """Load a YAML configuration file and validate it.

    A missing file yields the defaults. Invalid YAML or values raise
    :class:`~shelfrank.errors.ConfigError`.
    """

    p = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    raw: Dict[str, Any] = {}
    if p.exists():
        try:
            with open(p, "r", encoding="utf-8") as stream:
                raw = yaml.safe_load(stream) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {p}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Configuration root in {p} must be a mapping")
    try:
        return AppConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {p}: {exc}") from exc
