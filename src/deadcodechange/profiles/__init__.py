"""Product-line profiles — models, registry, built-in profiles."""

from deadcodechange.profiles.models import Profile
from deadcodechange.profiles.registry import ProfileRegistry, build_registry

__all__ = ["Profile", "ProfileRegistry", "build_registry"]
