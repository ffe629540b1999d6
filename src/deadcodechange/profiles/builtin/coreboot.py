"""Coreboot profile."""

from deadcodechange.profiles.models import Profile

COREBOOT = Profile(
    id="coreboot",
    name="Coreboot",
    description="Coreboot firmware: Kconfig files, Makefile.inc/.mk fragments, C, assembly and ASL sources.",
    vm_files_regex=r"(?:.*/)?Kconfig(?:\.[^/]*)?",
    code_files_regex=r".*\.(?:[hcS]|asl)",
    build_files_regex=r"(?:.*/)?Makefile(?:\.inc|\.mk)?",
)
