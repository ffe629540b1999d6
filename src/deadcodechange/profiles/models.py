"""Profile data model — path patterns stored as strings, compiled lazily."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Profile:
    """Path-classification patterns of one product line.

    Patterns are stored as raw strings so the profile remains serialisable and
    are matched against the full artifact path. The compiled regexes are built
    lazily on first access.
    """

    id: str
    name: str
    description: str
    vm_files_regex: str
    code_files_regex: str
    build_files_regex: str

    # --- cached compiled objects (not serialised) ---
    _compiled_vm: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _compiled_code: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _compiled_build: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def vm_pattern(self) -> re.Pattern[str]:
        if self._compiled_vm is None:
            self._compiled_vm = re.compile(self.vm_files_regex)
        return self._compiled_vm

    @property
    def code_pattern(self) -> re.Pattern[str]:
        if self._compiled_code is None:
            self._compiled_code = re.compile(self.code_files_regex)
        return self._compiled_code

    @property
    def build_pattern(self) -> re.Pattern[str]:
        if self._compiled_build is None:
            self._compiled_build = re.compile(self.build_files_regex)
        return self._compiled_build
