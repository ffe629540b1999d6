"""BusyBox profile."""

from deadcodechange.profiles.models import Profile

BUSYBOX = Profile(
    id="busybox",
    name="BusyBox",
    description="BusyBox: Config.in/Config.src models, Kbuild(.src) and Makefiles, C sources.",
    vm_files_regex=r"(?:.*/)?Config\.(?:in|src)",
    code_files_regex=r".*\.[hc]",
    build_files_regex=r"(?:.*/)?(?:Makefile|Kbuild)(?:\.src)?",
)
