"""
Config check use case — validate flatc.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from flatcgen.core.config.loader import ConfigError, load_config
from flatcgen.core.models.config import BuildConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: BuildConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "jobs": self.config.job_names() if self.config else [],
            "flatc": self.config.flatc if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the build configuration and report issues.

    Errors make the config unusable; warnings point at paths that do not
    exist yet (flatc will fail on them, but they may be generated earlier
    in the build).
    """
    result = ConfigCheckResult()

    try:
        loaded = load_config(config_path)
    except ConfigError as e:
        result.config_path = e.path
        result.errors.append(str(e))
        return result

    config = loaded.config
    result.config = config
    result.config_path = loaded.path

    if not config.jobs:
        result.errors.append("No jobs defined. Nothing would be generated.")

    # Paths are relative to the config file's directory
    root = loaded.root
    for job in config.jobs:
        for schema in job.input_schema_paths:
            if not (root / schema).is_file():
                result.warnings.append(f"Job '{job.name}': schema not found: {schema}")
        for include in job.include_directories:
            if not (root / include).is_dir():
                result.warnings.append(
                    f"Job '{job.name}': include directory not found: {include}"
                )

    result.valid = len(result.errors) == 0
    return result
