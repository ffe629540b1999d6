"""Relevance of changes to Kconfig variability model files."""

from __future__ import annotations

import re
from typing import Sequence

from deadcodechange.diff.kinds import strip_marker

COMMENT_MARKER = "#"

_COMMENT_ENTRY_RE = re.compile(r'^\s*comment\s+".*')
_ELEMENT_RE = re.compile(
    r"^\s*(config|menuconfig|choice|endchoice|menu|endmenu|mainmenu|if|endif"
    r"|bool|tristate|string|hex|int|default|def_bool|def_tristate|def_int|def_hex"
    r"|def_string|prompt|select|imply|visible if|range|optional)(\s+.*)?$"
)
_INCLUDE_RE = re.compile(r'^\s*(source|rsource|osource|orsource)\s+((".*".*)|(.*/.*))$')
_DEPENDS_ON_RE = re.compile(r"^\s*depends\s+on\s+.*")

_HELP_PREFIXES = ("help", "---help---", "--help--", "comment")


def normalize(line: str, index: int, lines: Sequence[str]) -> str:
    """Strip the diff marker and keep only the text before the first ``#``."""
    return strip_marker(line).split(COMMENT_MARKER, 1)[0]


def indentation(text: str) -> int:
    """Number of leading whitespace characters."""
    return len(text) - len(text.lstrip())


def inside_help(line: str, index: int, lines: Sequence[str]) -> bool:
    """Is *line* part of a help text or comment entry body?

    The nearest preceding non-empty line with a smaller indentation is the
    line's parent; help text is anything indented below ``help`` or
    ``comment``.
    """
    depth = indentation(line)
    if index <= 0 or depth == 0:
        return False
    cursor = index - 1
    while cursor >= 0:
        previous = normalize(lines[cursor], cursor, lines)
        if previous.strip() and indentation(previous) < depth:
            return previous.strip().startswith(_HELP_PREFIXES)
        cursor -= 1
    return False


def _defines_element(line: str) -> bool:
    return bool(_ELEMENT_RE.match(line) or _INCLUDE_RE.match(line))


def is_relevant(line: str, index: int, lines: Sequence[str]) -> bool:
    """Decide whether the normalized *line* at *index* changes the model.

    A ``depends on`` may belong to a configuration element or to a plain
    ``comment`` entry; only the former is relevant. The owner is found by
    walking back to the nearest comment entry or model element.
    """
    if inside_help(line, index, lines):
        return False
    if _defines_element(line):
        return True
    if not _DEPENDS_ON_RE.match(line):
        return False
    cursor = index - 1
    while cursor >= 0:
        previous = normalize(lines[cursor], cursor, lines)
        if previous.strip():
            if _COMMENT_ENTRY_RE.match(previous):
                return False
            if not inside_help(previous, cursor, lines) and _defines_element(previous):
                return True
        cursor -= 1
    return False
