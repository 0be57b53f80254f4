"""
Configuration loader — reads project.yml into declaration models.

Reads YAML, validates it against the pydantic Project schema and
returns typed objects. Every failure becomes a ConfigError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from orderroots.core.models.project import Project

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "project.yml"

# Walk at most this many parent directories looking for project.yml
_MAX_SEARCH_DEPTH = 20


class ConfigError(Exception):
    """Raised when project configuration is invalid or missing."""


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Search for project.yml starting from ``start_dir`` (default: cwd), walking up."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(_MAX_SEARCH_DEPTH):
        candidate = current / PROJECT_CONFIG_FILE
        if candidate.is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    return None


def load_project(path: Path | None = None) -> Project:
    """Load and validate project configuration.

    Args:
        path: Explicit path to project.yml. If None, searches upward.

    Returns:
        Validated Project model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_project_file()

    if path is None:
        raise ConfigError(f"No {PROJECT_CONFIG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading project config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Either flat, or wrapped under a "project" key with siblings alongside
    if isinstance(data.get("project"), dict):
        project_data = dict(data["project"])
        for key in ("version", "sdk", "modules"):
            if key in data and key not in project_data:
                project_data[key] = data[key]
    else:
        project_data = data

    try:
        project = Project.model_validate(project_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid project configuration: {e}") from e

    logger.info("Loaded project '%s' with %d modules", project.name, len(project.modules))
    return project
