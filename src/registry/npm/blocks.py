"""Line-oriented extraction of dependency blocks from package.json.

A JSON parser would lose the source line of each key, which is needed to anchor
reported issues. This scanner instead works on the raw text, one line at a
time, and only understands the shape npm itself writes:

    "dependencies": {
        "left-pad": "^1.3.0",
        ...
    }

Values spanning several lines, or nested objects inside the block, are not
supported.
"""

from __future__ import annotations

import os
import re
from typing import Dict, List, Optional, Tuple

from constants import Constants

_WHITESPACE = re.compile(r"\s+")
_ENTRY = re.compile(r'^"((?:[^"\\]|\\.)*)":(.+)$')
_EMPTY_INLINE = re.compile(r'^}[},]*$')


def is_npm_descriptor(filename: str) -> bool:
    """Return True for file names the NPM extractor accepts."""
    return os.path.basename(filename).lower() == Constants.PACKAGE_JSON_FILE


def _stripped_lines(text: str) -> List[str]:
    return [_WHITESPACE.sub("", line) for line in text.split("\n")]


def _find_marker(lines: List[str], block_name: str) -> Tuple[Optional[int], str]:
    marker = f'"{block_name}":{{'
    start = next((i for i, line in enumerate(lines) if line.startswith(marker)), None)
    rest = lines[start][len(marker):] if start is not None else ""
    return start, rest


def extract_block(text: str, block_name: str) -> Dict[str, int]:
    """Map each package in a top-level block to its 1-based line number.

    Args:
        text: package.json content.
        block_name: e.g. "dependencies" or "devDependencies".

    Returns:
        dict: package name -> line number, in file order. Empty when the
        block is missing. A key repeated inside the block keeps its last line.
    """
    lines = _stripped_lines(text)
    start, rest = _find_marker(lines, block_name)
    if start is None:
        return {}
    if "}" in rest:
        # block opened and closed on the marker line
        return {}

    found: Dict[str, int] = {}
    for index in range(start + 1, len(lines)):
        line = lines[index]
        if line.startswith("}"):
            break
        match = _ENTRY.match(line)
        if match:
            found.pop(match.group(1), None)
            found[match.group(1)] = index + 1
    return found


def inline_block_line(text: str, block_name: str) -> Optional[int]:
    """Return the line of a block written on a single line with entries in it.

    extract_block() treats such a block as empty, so its packages are never
    checked. ``"dependencies": {}`` has no entries and returns None.
    """
    lines = _stripped_lines(text)
    start, rest = _find_marker(lines, block_name)
    if start is None or "}" not in rest:
        return None
    if _EMPTY_INLINE.match(rest):
        return None
    return start + 1
