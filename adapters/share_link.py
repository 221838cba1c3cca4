"""
share_link.py - program text <-> URL fragment.

Whitespace runs become "_" so a shared link stays readable
(`1_2_3_*_4_/_-_5_+`); everything else is percent-encoded.
"""
from __future__ import annotations

import re
from urllib.parse import quote, unquote

DEFAULT_PROGRAM = "1 2 3 * 4 / - 5 +"

_WHITESPACE_RE = re.compile(r"\s+")


def to_fragment(text: str) -> str:
    """Encode program text for the `#...` part of a URL."""
    return quote(_WHITESPACE_RE.sub("_", text.strip()), safe="!'()*")


def from_fragment(
    fragment: str,
    default: str = DEFAULT_PROGRAM,
    percent_decoded: bool = False,
) -> str:
    """Decode a URL fragment back to program text; empty → `default`.

    Pass `percent_decoded=True` when the caller (e.g. a router reading a path
    parameter) has already undone the percent-encoding.
    """
    fragment = fragment.removeprefix("#")
    if not fragment:
        return default
    if not percent_decoded:
        fragment = unquote(fragment)
    return fragment.replace("_", " ")
