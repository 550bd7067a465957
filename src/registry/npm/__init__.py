"""NPM descriptor support.

- blocks.py: line-oriented extraction of package.json dependency blocks
"""

from .blocks import extract_block, inline_block_line, is_npm_descriptor  # noqa: F401

__all__ = ["extract_block", "inline_block_line", "is_npm_descriptor"]
