"""Load and merge configuration from .deadcodechange.toml and env vars."""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from deadcodechange.config.schema import (
    OUTPUT_FORMATS,
    AnalysisConfig,
    DeadCodeChangeConfig,
    FilePatterns,
    FilesConfig,
    GitConfig,
    OutputConfig,
)

if TYPE_CHECKING:
    from deadcodechange.profiles.registry import ProfileRegistry

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".deadcodechange.toml"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed, unreadable or incomplete."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_int(name: str, minimum: int) -> Optional[int]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        number = int(val)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, val)
        return None
    return number if number >= minimum else None


def _merge_env_overrides(cfg: DeadCodeChangeConfig) -> None:
    """Apply DCC_* environment variable overrides."""
    if val := os.environ.get("DCC_PROFILE"):
        cfg.files.profile = val.strip()
    if val := os.environ.get("DCC_CONSIDER_ALL_BLOCKS"):
        if val.lower() in _TRUE_VALUES:
            cfg.analysis.consider_all_blocks = True
        elif val.lower() in _FALSE_VALUES:
            cfg.analysis.consider_all_blocks = False
    if val := os.environ.get("DCC_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if (jobs := _env_int("DCC_JOBS", 1)) is not None:
        cfg.analysis.jobs = jobs
    if (context := _env_int("DCC_CONTEXT_LINES", 0)) is not None:
        cfg.git.context_lines = context


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> DeadCodeChangeConfig:
    """Load and return a DeadCodeChangeConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = DeadCodeChangeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = DeadCodeChangeConfig(
            version=str(raw.get("version", "1.0")),
            files=_build_section(raw, FilesConfig, "files"),
            analysis=_build_section(raw, AnalysisConfig, "analysis"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        logger.debug("Loaded configuration from %s", config_path)

    _merge_env_overrides(cfg)
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"output.format must be one of {', '.join(OUTPUT_FORMATS)}")
    return cfg


def compile_pattern(key: str, expression: Optional[str]) -> re.Pattern[str]:
    """Validate and compile one path-classification expression.

    Raises:
        ConfigError: if *expression* is empty or not a valid regular expression.
    """
    if not expression or not expression.strip():
        raise ConfigError(f"{key} is missing or empty")
    try:
        return re.compile(expression)
    except re.error as exc:
        raise ConfigError(f"{key} is not a valid regular expression: {exc}") from exc


def resolve_patterns(cfg: DeadCodeChangeConfig, registry: "ProfileRegistry") -> FilePatterns:
    """Resolve the three path expressions from the profile and config overrides."""
    files = cfg.files
    profile = registry.get(files.profile) if files.profile else None
    if files.profile and profile is None:
        known = ", ".join(p.id for p in registry.all_profiles)
        raise ConfigError(f"Unknown profile {files.profile!r} (available: {known})")

    def pick(key: str, compiled: str) -> re.Pattern[str]:
        override = getattr(files, key)
        if override or profile is None:
            return compile_pattern(key, override)
        # Profile patterns are compiled once and cached on the profile
        if not getattr(profile, key).strip():
            raise ConfigError(f"{key} of profile {profile.id!r} is missing or empty")
        try:
            return getattr(profile, compiled)
        except re.error as exc:
            raise ConfigError(
                f"{key} of profile {profile.id!r} is not a valid regular expression: {exc}"
            ) from exc

    return FilePatterns(
        vm=pick("vm_files_regex", "vm_pattern"),
        code=pick("code_files_regex", "code_pattern"),
        build=pick("build_files_regex", "build_pattern"),
        profile=profile.id if profile is not None else None,
    )
