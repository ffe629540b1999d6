"""Linux kernel profile."""

from deadcodechange.profiles.models import Profile

LINUX = Profile(
    id="linux",
    name="Linux",
    description="Linux kernel: Kconfig files, Kbuild/Makefiles, C and assembly sources.",
    vm_files_regex=r"(?:.*/)?Kconfig(?:\.[^/]*)?",
    code_files_regex=r".*\.[hcS]",
    build_files_regex=r"(?:.*/)?(?:Makefile|Kbuild)(?:\.[^/]*)?",
)
