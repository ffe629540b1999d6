"""Relevance of changes to Kbuild files and Makefiles.

Make conditionals (``ifeq``/``ifneq``/``ifdef``/``ifndef`` ... ``else`` ...
``endif``) are handled like preprocessor blocks. Kbuild additionally gates
objects through configuration-dependent variable names such as
``obj-$(CONFIG_FOO) += foo.o``, so any statement referencing a configuration
variable is relevant too.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from deadcodechange.diff.blocks import (
    BlockGrammar,
    Directive,
    block_references_config,
    ends_with_continuation,
    statement_start,
)
from deadcodechange.diff.kinds import opposite_marker, strip_marker

# '#' starts a comment unless escaped as '\#'.
_COMMENT_RE = re.compile(r"(?<!\\)#")
_CONFIG_REF_RE = re.compile(r"(?:^|[\s(\[{<)\]}>,])!?CONFIG_\w")
_HELPER_REF_RE = re.compile(
    r"\$[({](?:filter|filter-out|findstring|strip|or|and|if)\s[^)}]*?\bCONFIG_\w"
)
_DIRECTIVE_RE = re.compile(r"^\s*(ifeq|ifneq|ifdef|ifndef|else|endif)\b(.*)$")
_ELSE_IF_RE = re.compile(r"^\s*(ifeq|ifneq|ifdef|ifndef)\b")

_DIRECTIVES = {
    "ifeq": Directive.OPEN,
    "ifneq": Directive.OPEN,
    "ifdef": Directive.OPEN,
    "ifndef": Directive.OPEN,
    "else": Directive.ELSE,
    "endif": Directive.CLOSE,
}


def inside_comment(lines: Sequence[str], index: int) -> bool:
    """Is the line at *index* the continuation of a ``#`` comment?

    Make continues a comment onto the next line when it ends with a backslash.
    """
    cursor = index - 1
    while cursor >= 0:
        text = strip_marker(lines[cursor])
        if not ends_with_continuation(text):
            return False
        if _COMMENT_RE.search(text):
            return True
        cursor -= 1
    return False


def normalize(line: str, index: int, lines: Sequence[str]) -> str:
    """Strip the diff marker and Make comments from *line*."""
    text = strip_marker(line)
    m = _COMMENT_RE.search(text)
    if m is not None:
        text = text[:m.start()]
    if text.strip() and inside_comment(lines, index):
        return ""
    return text


def directive(text: str) -> Optional[Directive]:
    m = _DIRECTIVE_RE.match(text)
    if m is None:
        return None
    keyword = m.group(1)
    if keyword == "else" and _ELSE_IF_RE.match(m.group(2)):
        return Directive.BRANCH
    return _DIRECTIVES[keyword]


def references_config(text: str) -> bool:
    return bool(_CONFIG_REF_RE.search(text) or _HELPER_REF_RE.search(text))


GRAMMAR = BlockGrammar(
    name="build",
    normalize=normalize,
    directive=directive,
    references_config=references_config,
)


def _statement_references_config(lines: Sequence[str], start: int) -> bool:
    cursor = start
    total = len(lines)
    while cursor < total:
        text = normalize(lines[cursor], cursor, lines)
        if references_config(text):
            return True
        if not ends_with_continuation(text):
            return False
        cursor += 1
    return False


def is_relevant(line: str, index: int, lines: Sequence[str]) -> bool:
    """Decide whether the normalized *line* at *index* changes build variability."""
    if inside_comment(lines, index):
        return False
    start = statement_start(GRAMMAR, lines, index)
    header = line if start == index else normalize(lines[start], start, lines)
    found = directive(header)
    if found is None:
        return _statement_references_config(lines, start)
    return block_references_config(GRAMMAR, lines, start, found, opposite_marker(lines[index]))
