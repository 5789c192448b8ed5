"""Project configuration for constref."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .inflector import Inflector
from .inspectors import INSPECTORS
from .namespace_index import AutoloadRoot, default_autoload_roots

logger = logging.getLogger(__name__)

CONFIG_FILE = ".constref.json"
# Overrides the config file location
CONFIG_ENV_VAR = "CONSTREF_CONFIG"


class AutoloadRootConfig(BaseModel):
    path: str = Field(..., description="Directory relative to the project root")
    namespace: Optional[str] = Field(
        None, description="Base namespace, e.g. 'Admin::Tools'; top level if omitted"
    )


class InflectionConfig(BaseModel):
    acronyms: list[str] = Field(default_factory=list)
    overrides: dict[str, str] = Field(
        default_factory=dict, description="Basename -> constant name, e.g. {'oauth': 'OAuth'}"
    )


class ProjectConfig(BaseModel):
    """Contents of ``.constref.json``."""

    autoload_roots: list[AutoloadRootConfig] = Field(
        default_factory=list,
        description="Autoload roots; conventional Rails roots are used if empty",
    )
    collapse: list[str] = Field(default_factory=list)
    ignore: list[str] = Field(default_factory=list)
    inflections: InflectionConfig = Field(default_factory=InflectionConfig)
    inspectors: list[str] = Field(default_factory=lambda: ["constant"])

    @field_validator("inspectors")
    @classmethod
    def _known_inspectors(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in INSPECTORS]
        if unknown:
            raise ValueError(
                f"unknown inspectors {unknown}; available: {sorted(INSPECTORS)}"
            )
        return value

    def roots_for(self, project_root: Path) -> list[AutoloadRoot]:
        if not self.autoload_roots:
            return default_autoload_roots(project_root)
        return [AutoloadRoot.create(r.path, r.namespace) for r in self.autoload_roots]

    def inflector(self) -> Inflector:
        return Inflector(
            acronyms=self.inflections.acronyms,
            overrides=self.inflections.overrides,
        )


def load_config(project_root: str | Path, path: str | Path | None = None) -> ProjectConfig:
    """Load the project configuration.

    The file is ``path`` if given, else ``$CONSTREF_CONFIG``, else
    ``<project_root>/.constref.json``. A missing default file yields the
    default configuration; a missing explicit file is an error.

    Raises:
        ConfigError: If the file is missing (when explicit), not JSON, or invalid.
    """
    explicit = path or os.environ.get(CONFIG_ENV_VAR)
    config_path = Path(explicit) if explicit else Path(project_root) / CONFIG_FILE

    if not config_path.exists():
        if explicit:
            raise ConfigError(str(config_path), "file not found")
        logger.debug("No config at %s, using defaults", config_path)
        return ProjectConfig()

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(str(config_path), f"invalid JSON ({e})") from e

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(config_path), str(e)) from e
