"""Built-in profiles — aggregate all product lines."""

from deadcodechange.profiles.builtin.busybox import BUSYBOX
from deadcodechange.profiles.builtin.coreboot import COREBOOT
from deadcodechange.profiles.builtin.linux import LINUX
from deadcodechange.profiles.models import Profile

ALL_BUILTIN_PROFILES: list[Profile] = [LINUX, COREBOOT, BUSYBOX]

__all__ = ["ALL_BUILTIN_PROFILES"]
