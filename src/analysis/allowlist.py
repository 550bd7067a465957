"""Allow-list compilation.

An allow-list is newline separated text. Each trimmed line is one of:

- a comment, starting with ``#`` (ignored)
- a regular expression, starting with ``regex:`` (case-insensitive, must match
  the whole identifier)
- a literal identifier (case-insensitive equality)

Blank lines are ignored. An absent or empty allow-list allows nothing.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Optional, Tuple

from constants import Constants
from .errors import ConfigurationError

_LINE_SPLIT = re.compile(r"\r?\n")


class AllowList:
    """Compiled allow-list predicate over dependency identifiers.

    Instances are immutable once built and may be shared between threads.
    """

    __slots__ = ("_entries", "_literals", "_patterns")

    def __init__(self, entries: Tuple[str, ...], literals: FrozenSet[str],
                 patterns: Tuple[re.Pattern[str], ...]):
        self._entries = entries
        self._literals = literals
        self._patterns = patterns

    @property
    def entries(self) -> Tuple[str, ...]:
        """Normalized (trimmed, comment-free, sorted) entry lines."""
        return self._entries

    def matches(self, identifier: str) -> bool:
        """Return True when any entry allows ``identifier``."""
        if identifier.lower() in self._literals:
            return True
        return any(p.fullmatch(identifier) for p in self._patterns)

    __call__ = matches

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"AllowList({list(self._entries)!r})"


def _split_entries(spec: str) -> Tuple[str, ...]:
    lines = (line.strip() for line in _LINE_SPLIT.split(spec))
    return tuple(sorted(
        line for line in lines
        if line and not line.startswith(Constants.COMMENT_LINE_PREFIX)
    ))


def compile_entry(entry: str) -> Optional[re.Pattern[str]]:
    """Compile a single ``regex:`` entry.

    Returns:
        The compiled pattern, or None when the entry is a literal.

    Raises:
        ConfigurationError: if the expression is not valid.
    """
    if not entry.startswith(Constants.REGEX_PREFIX):
        return None
    expression = entry[len(Constants.REGEX_PREFIX):]
    try:
        return re.compile(expression, re.IGNORECASE)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid regular expression in allow-list entry '{entry}': {e}"
        ) from e


def compile_allow_list(spec: Optional[str]) -> AllowList:
    """Compile an allow-list specification into a predicate.

    Args:
        spec: newline separated allow-list text, or None.

    Returns:
        AllowList: predicate matching the allowed identifiers. An absent or
        empty specification yields a predicate which matches nothing.

    Raises:
        ConfigurationError: if any ``regex:`` entry fails to compile.
    """
    if spec is None:
        return AllowList((), frozenset(), ())

    entries = _split_entries(spec)
    literals = set()
    patterns = []
    for entry in entries:
        pattern = compile_entry(entry)
        if pattern is None:
            literals.add(entry.lower())
        else:
            patterns.append(pattern)
    return AllowList(entries, frozenset(literals), tuple(patterns))
