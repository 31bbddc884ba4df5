"""Configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from folio.blog.collection import SortOrder

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "folio" / "config.toml"


class ContentConfig(BaseModel):
    """[content] section."""

    directory: str = "content/blog"
    sort_order: SortOrder = SortOrder.ASC


class FolioConfig(BaseModel):
    """Top-level configuration model."""

    content: ContentConfig = Field(default_factory=ContentConfig)

    @property
    def content_dir(self) -> Path:
        return Path(self.content.directory)


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .folio.toml in CWD
    3. ~/.config/folio/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged FolioConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for candidate in (Path(CONFIG_FILENAME), GLOBAL_CONFIG_PATH):
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break

    config = _validate(data)
    return _apply_env_vars(config)


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_dir": ("content", "directory"),
        "sort_order": ("content", "sort_order"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value)

    return FolioConfig.model_validate(data)


def _validate(data: dict[str, object]) -> FolioConfig:
    if not data:
        return FolioConfig()
    try:
        return FolioConfig.model_validate(data)
    except ValueError as exc:
        logger.warning("Ignoring invalid configuration: %s", exc)
        return FolioConfig()


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "FOLIO_CONTENT_DIR": ("content", "directory"),
        "FOLIO_SORT_ORDER": ("content", "sort_order"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value.strip().lower() if field == "sort_order" else value

    try:
        return FolioConfig.model_validate(data)
    except ValueError as exc:
        logger.warning("Ignoring invalid environment overrides: %s", exc)
        return config
