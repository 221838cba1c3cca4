"""
lexer.py - split program text into RPN tokens.

Tokens are separated by any run of whitespace. There is no escaping and no
comment syntax; every non-empty chunk is one token.
"""
from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(text: str) -> list[str]:
    """Return the non-empty whitespace-delimited tokens of `text`."""
    return [token for token in _WHITESPACE_RE.split(text) if token]
