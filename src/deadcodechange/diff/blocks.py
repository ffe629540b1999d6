"""Block backtracking shared by the code and build classifiers.

A diff only shows a window of the changed file, so conditional blocks cannot be
parsed. Instead, the classifiers resolve a changed line to the start of its
logical statement (following trailing-backslash continuations backwards) and,
for conditional directives, walk the buffer with a nesting counter until the
paired opener or closer is reached. Every walk is an explicit index cursor
bounded by the buffer, so malformed or truncated diffs simply end the search.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

CONTINUATION_MARKER = "\\"


class Directive(str, Enum):
    OPEN = "open"  # #if, #ifdef, #ifndef / ifeq, ifneq, ifdef, ifndef
    BRANCH = "branch"  # #elif / else ifeq: ends a branch and has its own condition
    ELSE = "else"
    CLOSE = "close"  # #endif / endif


_CONDITIONAL_HEADERS = (Directive.OPEN, Directive.BRANCH)


@dataclass(frozen=True)
class BlockGrammar:
    """Token grammar of one artifact type."""

    name: str
    normalize: Callable[[str, int, Sequence[str]], str]
    directive: Callable[[str], Optional[Directive]]
    references_config: Callable[[str], bool]


def ends_with_continuation(text: str) -> bool:
    return text.rstrip().endswith(CONTINUATION_MARKER)


def statement_start(grammar: BlockGrammar, lines: Sequence[str], index: int) -> int:
    """Index of the first physical line of the statement containing *index*."""
    start = index
    cursor = index - 1
    while cursor >= 0 and ends_with_continuation(grammar.normalize(lines[cursor], cursor, lines)):
        start = cursor
        cursor -= 1
    return start


def condition_references_config(grammar: BlockGrammar, lines: Sequence[str], start: int) -> bool:
    """Check the header at *start* and its continuation lines for a config reference."""
    cursor = start
    text = grammar.normalize(lines[cursor], cursor, lines)
    while True:
        if grammar.references_config(text):
            return True
        if not ends_with_continuation(text) or cursor + 1 >= len(lines):
            return False
        cursor += 1
        text = grammar.normalize(lines[cursor], cursor, lines)


def _continues_conditional(grammar: BlockGrammar, lines: Sequence[str], index: int) -> bool:
    """True if the line at *index* continues a conditional header."""
    start = statement_start(grammar, lines, index)
    if start == index:
        return False
    header = grammar.normalize(lines[start], start, lines)
    return grammar.directive(header) in _CONDITIONAL_HEADERS


def _references_config_inline(
    grammar: BlockGrammar, lines: Sequence[str], index: int, text: str
) -> bool:
    """Evaluate one scanned line. Returns True on a config-referencing header."""
    directive = grammar.directive(text)
    if directive in _CONDITIONAL_HEADERS:
        return condition_references_config(grammar, lines, index)
    if directive is None and grammar.references_config(text):
        return _continues_conditional(grammar, lines, index)
    return False


def scan_backward(
    grammar: BlockGrammar,
    lines: Sequence[str],
    position: int,
    skip_marker: Optional[str] = None,
) -> bool:
    """Walk back from *position* to the paired opener (inclusive).

    Returns True as soon as a conditional header in that span, nested or not,
    references a configuration symbol. Lines starting with *skip_marker*
    belong to the other file version and are ignored.
    """
    depth = 0
    cursor = position - 1
    while cursor >= 0:
        raw = lines[cursor]
        if skip_marker is not None and raw.startswith(skip_marker):
            cursor -= 1
            continue
        text = grammar.normalize(raw, cursor, lines)
        directive = grammar.directive(text)
        if directive is Directive.CLOSE:
            depth += 1
        elif _references_config_inline(grammar, lines, cursor, text):
            return True
        elif directive is Directive.OPEN:
            if depth == 0:
                return False
            depth -= 1
        cursor -= 1
    return False


def scan_forward(
    grammar: BlockGrammar,
    lines: Sequence[str],
    position: int,
    skip_marker: Optional[str] = None,
) -> bool:
    """Walk forward from *position* to the paired closer; see :func:`scan_backward`."""
    depth = 0
    cursor = position + 1
    total = len(lines)
    while cursor < total:
        raw = lines[cursor]
        if skip_marker is not None and raw.startswith(skip_marker):
            cursor += 1
            continue
        text = grammar.normalize(raw, cursor, lines)
        directive = grammar.directive(text)
        if directive is Directive.CLOSE:
            if depth == 0:
                return False
            depth -= 1
        elif _references_config_inline(grammar, lines, cursor, text):
            return True
        elif directive is Directive.OPEN:
            depth += 1
        cursor += 1
    return False


def block_references_config(
    grammar: BlockGrammar,
    lines: Sequence[str],
    start: int,
    directive: Directive,
    skip_marker: Optional[str] = None,
) -> bool:
    """Does the block around the directive at *start* reference a config symbol?

    Openers check their own condition, then the block body up to the closer.
    Closers check the span back to their opener. ``#else``/``#elif`` lines sit
    in the middle of a block and check both sides.
    """
    if directive in _CONDITIONAL_HEADERS and condition_references_config(grammar, lines, start):
        return True
    if directive is not Directive.OPEN and scan_backward(grammar, lines, start, skip_marker):
        return True
    if directive is not Directive.CLOSE and scan_forward(grammar, lines, start, skip_marker):
        return True
    return False
