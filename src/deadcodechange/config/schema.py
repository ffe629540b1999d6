"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Optional

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class FilesConfig:
    profile: str = "linux"
    # Non-empty values override the profile's pattern
    vm_files_regex: str = ""
    code_files_regex: str = ""
    build_files_regex: str = ""


@dataclass
class AnalysisConfig:
    consider_all_blocks: bool = False
    jobs: int = 1


@dataclass
class GitConfig:
    context_lines: int = 3


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True
    show_evidence: bool = False


@dataclass
class DeadCodeChangeConfig:
    version: str = "1.0"
    files: FilesConfig = field(default_factory=FilesConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


@dataclass(frozen=True)
class FilePatterns:
    """The three compiled path-classification expressions."""

    vm: re.Pattern[str]
    code: re.Pattern[str]
    build: re.Pattern[str]
    profile: Optional[str] = None
