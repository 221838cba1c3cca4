"""
Adapter: PlainTextPresenter
Implementuje port Presenter — liniowy tekst do terminala i logów.

Ułamek → a/b, pierwiastek → √a, potęga → a^b; złożone części ułamka,
pierwiastka i wykładnika dostają nawiasy, żeby zapis liniowy był jednoznaczny.
"""
from __future__ import annotations

from adapters.presentation._format import format_number
from contracts import (
    FractionFragment,
    FragmentItem,
    IdentToken,
    NumberToken,
    OperatorToken,
    RadicalFragment,
    RenderedLine,
    RowFragment,
    SuperscriptFragment,
)

# no space before these
_NO_SPACE_BEFORE = {"(", ")", ","}


def _is_operator(item: FragmentItem, *texts: str) -> bool:
    return isinstance(item, OperatorToken) and item.text in texts


def _is_atomic(row: RowFragment) -> bool:
    if len(row.items) != 1:
        return False
    item = row.items[0]
    if isinstance(item, RowFragment):
        return _is_atomic(item)
    return isinstance(item, (NumberToken, IdentToken))


def _is_group(row: RowFragment) -> bool:
    """Wiersz już objęty nawiasami przez renderer."""
    if len(row.items) != 1 or not isinstance(row.items[0], RowFragment):
        return False
    inner = row.items[0].items
    return bool(inner) and _is_operator(inner[0], "(") and _is_operator(inner[-1], ")")


def _is_call(row: RowFragment) -> bool:
    """Wiersz `f(a, b)`: nazwa i nawias domykany dopiero na końcu."""
    items = row.items
    if len(items) < 3 or not isinstance(items[0], IdentToken):
        return False
    if not _is_operator(items[1], "(") or not _is_operator(items[-1], ")"):
        return False
    # "sin(1) + cos(2)" closes its first paren before the end
    depth = 0
    for item in items[1:-1]:
        if _is_operator(item, "("):
            depth += 1
        elif _is_operator(item, ")"):
            depth -= 1
            if depth == 0:
                return False
    return True


def _grouped(row: RowFragment) -> str:
    text = _text(row)
    return text if _is_atomic(row) or _is_group(row) or _is_call(row) else f"({text})"


def _join(items: list[FragmentItem]) -> str:
    # negative number: "-" glued to its magnitude
    if len(items) == 2 and _is_operator(items[0], "-") and isinstance(items[1], NumberToken):
        return "-" + _text(items[1])

    out = ""
    prev: FragmentItem | None = None
    for item in items:
        spaced = (
            prev is not None
            and not _is_operator(prev, "(")
            and not (isinstance(item, OperatorToken) and item.text in _NO_SPACE_BEFORE)
        )
        out += (" " if spaced else "") + _text(item)
        prev = item
    return out


def _text(item: FragmentItem) -> str:
    if isinstance(item, NumberToken):
        return format_number(item.value)
    if isinstance(item, (IdentToken, OperatorToken)):
        return item.text
    if isinstance(item, RowFragment):
        return _join(item.items)
    if isinstance(item, FractionFragment):
        return f"{_grouped(item.numerator)}/{_grouped(item.denominator)}"
    if isinstance(item, RadicalFragment):
        return f"√{_grouped(item.radicand)}"
    if isinstance(item, SuperscriptFragment):
        return f"{_grouped(item.base)}^{_grouped(item.exponent)}"
    raise TypeError(f"Unknown fragment type: {type(item)}")


def to_text(item: FragmentItem) -> str:
    """Tekst dowolnego fragmentu (także pojedynczego węzła)."""
    return _text(item)


class PlainTextPresenter:
    """Jedna linia tekstu na wynik: `1 - (2 × 3)/4 + 5 = 4.5`."""

    def present(self, line: RenderedLine) -> str:
        return _text(line.row)
