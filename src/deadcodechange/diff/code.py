"""Relevance of changes to C source and header files.

Only preprocessor conditionals decide which code is compiled for which
configuration, so a changed line is relevant only if its logical statement is
an ``#if``/``#ifdef``/``#ifndef``/``#elif``/``#else``/``#endif`` directive. With
``consider_all_blocks`` disabled, the block must additionally reference a
``CONFIG_`` symbol in its own condition or in a nested condition.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from deadcodechange.diff.blocks import (
    BlockGrammar,
    Directive,
    block_references_config,
    statement_start,
)
from deadcodechange.diff.kinds import opposite_marker, strip_marker

SL_COMMENT_MARKER = "//"
ML_COMMENT_START_MARKER = "/*"
ML_COMMENT_END_MARKER = "*/"

# A CONFIG_ symbol, optionally negated, behind a delimiter (or at line start).
_CONFIG_REF_RE = re.compile(r"(?:^|[\s(\[{<)\]}>])!?CONFIG_\w")
_HELPER_REF_RE = re.compile(
    r"!?\b(?:defined|IS_BUILTIN|IS_MODULE|IS_REACHABLE|IS_ENABLED)\s*\(\s*!?CONFIG_\w"
)
_DIRECTIVE_RE = re.compile(
    r"^\s*#\s*(ifdef|ifndef|if|elifdef|elifndef|elif|else|endif)\b"
)

_DIRECTIVES = {
    "if": Directive.OPEN,
    "ifdef": Directive.OPEN,
    "ifndef": Directive.OPEN,
    "elif": Directive.BRANCH,
    "elifdef": Directive.BRANCH,
    "elifndef": Directive.BRANCH,
    "else": Directive.ELSE,
    "endif": Directive.CLOSE,
}


def _leading_close(text: str) -> bool:
    """True if *text* closes a comment opened on an earlier line."""
    close = text.find(ML_COMMENT_END_MARKER)
    if close == -1:
        return False
    start = text.find(ML_COMMENT_START_MARKER)
    return start == -1 or close < start


def _strip_comments(text: str) -> str:
    if _leading_close(text):
        text = text[text.find(ML_COMMENT_END_MARKER) + len(ML_COMMENT_END_MARKER):]
    while True:
        single = text.find(SL_COMMENT_MARKER)
        start = text.find(ML_COMMENT_START_MARKER)
        if single != -1 and (start == -1 or single < start):
            return text[:single]
        if start == -1:
            return text
        end = text.find(ML_COMMENT_END_MARKER, start + len(ML_COMMENT_START_MARKER))
        if end == -1:
            return text[:start]
        text = text[:start] + " " + text[end + len(ML_COMMENT_END_MARKER):]


def inside_block_comment(lines: Sequence[str], index: int) -> bool:
    """Is the line at *index* inside a ``/* ... */`` comment opened earlier?

    Looks back for the nearest line carrying a comment boundary. A line that
    itself terminates the comment is not considered inside it.
    """
    if _leading_close(strip_marker(lines[index])):
        return False
    cursor = index - 1
    while cursor >= 0:
        text = strip_marker(lines[cursor])
        start = text.rfind(ML_COMMENT_START_MARKER)
        end = text.rfind(ML_COMMENT_END_MARKER)
        if start != -1 or end != -1:
            return start > end
        cursor -= 1
    return False


def normalize(line: str, index: int, lines: Sequence[str]) -> str:
    """Strip the diff marker and C comments from *line*."""
    text = _strip_comments(strip_marker(line))
    if text.strip() and inside_block_comment(lines, index):
        return ""
    return text


def directive(text: str) -> Optional[Directive]:
    m = _DIRECTIVE_RE.match(text)
    if m is None:
        return None
    return _DIRECTIVES[m.group(1)]


def references_config(text: str) -> bool:
    return bool(_CONFIG_REF_RE.search(text) or _HELPER_REF_RE.search(text))


GRAMMAR = BlockGrammar(
    name="code",
    normalize=normalize,
    directive=directive,
    references_config=references_config,
)


def is_relevant(
    line: str,
    index: int,
    lines: Sequence[str],
    *,
    consider_all_blocks: bool = False,
) -> bool:
    """Decide whether the normalized *line* at *index* changes a preprocessor block."""
    if inside_block_comment(lines, index):
        return False
    start = statement_start(GRAMMAR, lines, index)
    header = line if start == index else normalize(lines[start], start, lines)
    found = directive(header)
    if found is None:
        return False
    if consider_all_blocks:
        return True
    return block_references_config(GRAMMAR, lines, start, found, opposite_marker(lines[index]))
