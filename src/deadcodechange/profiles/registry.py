"""Profile registry — built-in product lines plus custom YAML profiles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from deadcodechange.config.loader import ConfigError
from deadcodechange.profiles.models import Profile

logger = logging.getLogger(__name__)

CUSTOM_PROFILE_DIR = ".deadcodechange-profiles"

_REQUIRED_KEYS = ("id", "vm_files_regex", "code_files_regex", "build_files_regex")


class ProfileRegistry:
    """Central store for all product-line profiles."""

    def __init__(self) -> None:
        self._profiles: Dict[str, Profile] = {}

    # ---- registration ----

    def register(self, profile: Profile) -> None:
        if profile.id in self._profiles:
            logger.info("Profile %r replaced", profile.id)
        self._profiles[profile.id] = profile

    def register_many(self, profiles: list[Profile]) -> None:
        for p in profiles:
            self.register(p)

    # ---- queries ----

    @property
    def all_profiles(self) -> List[Profile]:
        return list(self._profiles.values())

    def get(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    def __contains__(self, profile_id: object) -> bool:
        return profile_id in self._profiles

    # ---- custom profile loading ----

    def load_custom_profiles(self, directory: Path) -> int:
        """Load YAML profile files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_profiles(path)
        return count

    def _load_yaml_profiles(self, path: Path) -> int:
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to read profile file {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict):
                raise ConfigError(f"{path}: profile entries must be mappings")
            missing = [k for k in _REQUIRED_KEYS if not entry.get(k)]
            if missing:
                raise ConfigError(f"{path}: profile is missing {', '.join(missing)}")
            profile = Profile(
                id=str(entry["id"]),
                name=entry.get("name", entry["id"]),
                description=entry.get("description", ""),
                vm_files_regex=entry["vm_files_regex"],
                code_files_regex=entry["code_files_regex"],
                build_files_regex=entry["build_files_regex"],
            )
            self.register(profile)
            count += 1
        logger.debug("Loaded %d profile(s) from %s", count, path)
        return count


def build_registry(repo_root: Optional[Path] = None) -> ProfileRegistry:
    """Create a registry with the built-in and the repository's custom profiles."""
    from deadcodechange.profiles.builtin import ALL_BUILTIN_PROFILES

    registry = ProfileRegistry()
    registry.register_many(ALL_BUILTIN_PROFILES)

    if repo_root is not None:
        registry.load_custom_profiles(repo_root / CUSTOM_PROFILE_DIR)

    return registry
