"""Shared test fixtures — sample diffs, line buffers, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from deadcodechange.config.loader import resolve_patterns
from deadcodechange.config.schema import DeadCodeChangeConfig, FilePatterns
from deadcodechange.profiles.registry import build_registry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep DCC_* variables of the calling shell out of the tests."""
    for name in (
        "DCC_PROFILE",
        "DCC_CONSIDER_ALL_BLOCKS",
        "DCC_FORMAT",
        "DCC_JOBS",
        "DCC_CONTEXT_LINES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def linux_patterns() -> FilePatterns:
    """Compiled patterns of the built-in Linux profile."""
    return resolve_patterns(DeadCodeChangeConfig(), build_registry())


@pytest.fixture
def sample_diff_relevant_code() -> str:
    """A commit wrapping code in a configuration-dependent block."""
    return textwrap.dedent("""\
        commit 1111111111111111111111111111111111111111
        Author: Dev <dev@example.com>
        Date:   Mon Jan 1 00:00:00 2024 +0000

            drivers: guard foo behind CONFIG_FOO

        diff --git a/drivers/foo.c b/drivers/foo.c
        index 1234567..89abcde 100644
        --- a/drivers/foo.c
        +++ b/drivers/foo.c
        @@ -1,3 +1,5 @@
         int a;
        +#ifdef CONFIG_FOO
         int b;
        +#endif
         int c;
    """)


@pytest.fixture
def sample_diff_irrelevant() -> str:
    """A plain patch touching only statements and documentation."""
    return textwrap.dedent("""\
        diff --git a/drivers/foo.c b/drivers/foo.c
        index 1234567..89abcde 100644
        --- a/drivers/foo.c
        +++ b/drivers/foo.c
        @@ -1,3 +1,3 @@
         int a;
        -int b = 1;
        +int b = 2;
         int c;
        diff --git a/Documentation/foo.rst b/Documentation/foo.rst
        index 1234567..89abcde 100644
        --- a/Documentation/foo.rst
        +++ b/Documentation/foo.rst
        @@ -1 +1 @@
        -#ifdef CONFIG_FOO
        +#ifdef CONFIG_BAR
    """)


@pytest.fixture
def sample_diff_two_commits() -> str:
    """``git log -p`` output with a Kconfig and a Makefile commit."""
    return textwrap.dedent("""\
        commit aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa
        Author: Dev <dev@example.com>
        Date:   Mon Jan 1 00:00:00 2024 +0000

            kconfig: add BAZ

        diff --git a/drivers/Kconfig b/drivers/Kconfig
        index 1234567..89abcde 100644
        --- a/drivers/Kconfig
        +++ b/drivers/Kconfig
        @@ -1,2 +1,4 @@
         config BAR
         \tbool "bar"
        +config BAZ
        +\tbool "baz"

        commit bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb
        Author: Dev <dev@example.com>
        Date:   Tue Jan 2 00:00:00 2024 +0000

            kbuild: build baz

        diff --git a/drivers/Makefile b/drivers/Makefile
        index 1234567..89abcde 100644
        --- a/drivers/Makefile
        +++ b/drivers/Makefile
        @@ -1 +1,2 @@
         obj-y += core.o
        +obj-$(CONFIG_BAZ) += baz.o
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A diff with a binary file."""
    return textwrap.dedent("""\
        diff --git a/firmware/blob.bin b/firmware/blob.bin
        new file mode 100644
        Binary files /dev/null and b/firmware/blob.bin differ
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A diff with a renamed file."""
    return textwrap.dedent("""\
        diff --git a/drivers/old.c b/drivers/new.c
        similarity index 97%
        rename from drivers/old.c
        rename to drivers/new.c
        index abc1234..def5678 100644
        --- a/drivers/old.c
        +++ b/drivers/new.c
        @@ -1,1 +1,2 @@
         int a;
        +int b;
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    """A diff deleting a file."""
    return textwrap.dedent("""\
        diff --git a/drivers/gone.h b/drivers/gone.h
        deleted file mode 100644
        index abc1234..0000000
        --- a/drivers/gone.h
        +++ /dev/null
        @@ -1,2 +0,0 @@
        -#ifdef CONFIG_GONE
        -#endif
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' marker."""
    return textwrap.dedent("""\
        diff --git a/drivers/foo.h b/drivers/foo.h
        new file mode 100644
        index 0000000..abc1234
        --- /dev/null
        +++ b/drivers/foo.h
        @@ -0,0 +1 @@
        +#endif
        \\ No newline at end of file
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "commit.gpgsign", "false"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    # Initial commit
    readme = tmp_path / "README"
    readme.write_text("Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
