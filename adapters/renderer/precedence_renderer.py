"""
Adapter: PrecedenceRenderer
Implementuje port Renderer — buduje abstrakcyjne drzewo wyświetlania dla
każdego wyniku na szczycie stosu.

Każdy węzeł daje parę (lewa, prawa) siły wiązania:

  Literal, VarRef, '/', wywołania   (∞, ∞)
  Bind                             (1, 2)
  + -                              (3, 4)
  × mod                            (5, 6)
  sqrt                             (7, 8)
  pow                              (9, 10)

Dziecko operatora wrostkowego (lp, rp) dostaje nawiasy, gdy:
  lewe:  dziecko.prawa < lp
  prawe: dziecko.lewa  < rp

Ułamek, pierwiastek i wykładnik same wyznaczają swoje granice, więc ich
dzieci nigdy nie są nawiasowane (poza podstawą potęgi).

Głębokość zagnieżdżenia (ułamki, pierwiastki, potęgi, nawiasy) jest ograniczona
przez max_depth; głębsze drzewo kończy się NestingTooDeep zamiast drzewa,
którego nie da się zserializować ani wypisać.
"""
from __future__ import annotations

import math
from typing import Mapping

from adapters.builtins import BUILTINS, Builtin, Precedence, display, lookup
from contracts import (
    ApplyNode,
    BindNode,
    EvalResult,
    FractionFragment,
    FragmentItem,
    IdentToken,
    LiteralNode,
    NumberToken,
    OperatorToken,
    RadicalFragment,
    RenderedLine,
    RowFragment,
    SuperscriptFragment,
    VarRefNode,
)

_INF = math.inf

Powers = tuple[float, float]
# (items, precedence pair, nesting depth)
Rendered = tuple[list[FragmentItem], Powers, int]

DEFAULT_MAX_DEPTH = 64

_ATOM: Powers = (_INF, _INF)
_BIND: Powers = (1, 2)
_RADICAL: Powers = (7, 8)
_POWER: Powers = (9, 10)

_INFIX_POWERS: dict[Precedence, Powers] = {
    Precedence.ADDITIVE: (3, 4),
    Precedence.MULTIPLICATIVE: (5, 6),
}


class NestingTooDeep(ValueError):
    """Render tree of a node nests deeper than the renderer allows."""

    def __init__(self, index: int, depth: int, limit: int) -> None:
        super().__init__(
            f"Expression at node {index} nests {depth} levels deep, limit is {limit}"
        )
        self.index = index
        self.depth = depth
        self.limit = limit


def number_items(value: float) -> list[FragmentItem]:
    """Liczba ujemna to wiersz: operator '-' i wartość bezwzględna."""
    if value < 0:
        return [RowFragment(items=[OperatorToken(text="-"), NumberToken(value=-value)])]
    return [NumberToken(value=value)]


def _row(items: list[FragmentItem]) -> RowFragment:
    return RowFragment(items=list(items))


def _parenthesized(items: list[FragmentItem]) -> list[FragmentItem]:
    return [RowFragment(items=[OperatorToken(text="("), *items, OperatorToken(text=")")])]


class PrecedenceRenderer:
    """Renderer z minimalnym nawiasowaniem i pamięcią podręczną per indeks węzła."""

    def __init__(
        self,
        registry: Mapping[str, Builtin] = BUILTINS,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._registry = registry
        self._max_depth = max_depth

    # -- Renderer protocol -------------------------------------------------

    def render(self, result: EvalResult) -> list[RenderedLine]:
        cache = self._warm(result, max(result.top_level, default=-1) + 1)
        lines: list[RenderedLine] = []
        for index in result.top_level:
            items, _, _ = self._node(result, index, cache)
            value = result.values[index]
            lines.append(RenderedLine(
                index=index,
                value=value,
                row=_row([*items, OperatorToken(text="="), *number_items(value)]),
            ))
        return lines

    def render_node(self, result: EvalResult, index: int) -> RowFragment:
        if not 0 <= index < len(result.nodes):
            raise IndexError(f"Node index out of range: {index}")
        items, _, _ = self._node(result, index, self._warm(result, index + 1))
        return _row(items)

    # -- Prywatne ----------------------------------------------------------

    def _warm(self, result: EvalResult, stop: int) -> dict[int, Rendered]:
        # Children always precede their parents in the log, so filling the
        # cache in log order keeps the recursion one level deep.
        cache: dict[int, Rendered] = {}
        for index in range(stop):
            self._node(result, index, cache)
        return cache

    def _node(self, result: EvalResult, index: int, cache: dict[int, Rendered]) -> Rendered:
        hit = cache.get(index)
        if hit is None:
            hit = self._build(result, index, cache)
            if hit[2] > self._max_depth:
                raise NestingTooDeep(index, hit[2], self._max_depth)
            cache[index] = hit
        return hit

    def _build(self, result: EvalResult, index: int, cache: dict[int, Rendered]) -> Rendered:
        node = result.nodes[index]

        if isinstance(node, LiteralNode):
            items = number_items(node.value)
            return items, _ATOM, 1 if node.value < 0 else 0

        if isinstance(node, VarRefNode):
            return [IdentToken(text=node.name)], _ATOM, 0

        if isinstance(node, BindNode):
            src, _, depth = self._node(result, node.source, cache)
            return [IdentToken(text=node.name), OperatorToken(text="≔"), *src], _BIND, depth

        if isinstance(node, ApplyNode):
            return self._apply(result, node, cache)

        raise TypeError(f"Unknown node type: {type(node)}")

    def _apply(self, result: EvalResult, node: ApplyNode, cache: dict[int, Rendered]) -> Rendered:
        builtin = lookup(node.op, self._registry)
        precedence = builtin.precedence if builtin is not None else Precedence.CALL
        glyph = display(builtin) if builtin is not None else node.op
        args = [self._node(result, a, cache) for a in node.args]

        if precedence in _INFIX_POWERS:
            lp, rp = _INFIX_POWERS[precedence]
            (a_items, a_pow, a_depth), (b_items, b_pow, b_depth) = args
            wrap_a = a_pow[1] < lp
            wrap_b = b_pow[0] < rp
            left = _parenthesized(a_items) if wrap_a else a_items
            right = _parenthesized(b_items) if wrap_b else b_items
            depth = max(a_depth + wrap_a, b_depth + wrap_b)
            return [*left, OperatorToken(text=glyph), *right], (lp, rp), depth

        if precedence is Precedence.FRACTION:
            (a_items, _, a_depth), (b_items, _, b_depth) = args
            fraction = FractionFragment(numerator=_row(a_items), denominator=_row(b_items))
            return [fraction], _ATOM, max(a_depth, b_depth) + 1

        if precedence is Precedence.RADICAL:
            (a_items, _, a_depth), = args
            return [RadicalFragment(radicand=_row(a_items))], _RADICAL, a_depth + 1

        if precedence is Precedence.POWER:
            (a_items, a_pow, a_depth), (b_items, _, b_depth) = args
            wrap_base = a_pow[1] < _POWER[0]
            base = _parenthesized(a_items) if wrap_base else a_items
            superscript = SuperscriptFragment(base=_row(base), exponent=_row(b_items))
            return [superscript], _POWER, max(a_depth + wrap_base, b_depth) + 1

        if not args:
            return [IdentToken(text=glyph)], _ATOM, 0

        items: list[FragmentItem] = [IdentToken(text=glyph), OperatorToken(text="(")]
        for position, (arg_items, _, _) in enumerate(args):
            if position:
                items.append(OperatorToken(text=","))
            items.extend(arg_items)
        items.append(OperatorToken(text=")"))
        return items, _ATOM, max(depth for _, _, depth in args)
