"""
Configuration loader — reads flatc.yml into a BuildConfig.

``load_config`` is the single entry point: it locates the file (explicit
path, or the nearest flatc.yml above the working directory), parses it and
returns a ``LoadedConfig`` that remembers where it came from. Relative
paths inside the file mean "relative to the file", so callers use
``LoadedConfig.root`` as flatc's working directory.

Every problem surfaces as ConfigError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import ValidationError

from flatcgen.core.models.config import BuildConfig

logger = logging.getLogger(__name__)

BUILD_CONFIG_FILE = "flatc.yml"


class ConfigError(Exception):
    """Raised when the build configuration is invalid or missing.

    ``path`` is the config file involved, when one was located.
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class LoadedConfig:
    """A validated config and the file it was read from."""

    config: BuildConfig
    path: Path

    @property
    def root(self) -> Path:
        """Directory jobs run in: the one holding the config file."""
        return self.path.parent.resolve()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Nearest flatc.yml in ``start_dir`` (default: cwd) or any parent."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / BUILD_CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def parse_config(text: str, source: str = "<string>") -> BuildConfig:
    """Validate flatc.yml content. ``source`` only labels error messages."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    # An empty file is a config with no jobs
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")

    try:
        return BuildConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid build configuration in {source}: {e}") from e


def load_config(path: Path | None = None) -> LoadedConfig:
    """Locate, read and validate flatc.yml.

    Args:
        path: Explicit path to flatc.yml. If None, searches upward from cwd.

    Raises:
        ConfigError: If no file is found, or it cannot be read or validated.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            raise ConfigError(f"No {BUILD_CONFIG_FILE} found. Specify one with --config.")
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}", path=path)

    logger.debug("Loading build config from %s", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", path=path) from e

    try:
        config = parse_config(text, source=str(path))
    except ConfigError as e:
        e.path = path
        raise

    logger.info("Loaded %d generation job(s) from %s", len(config.jobs), path)
    return LoadedConfig(config=config, path=path)
