"""
Port: Renderer
Responsibility: turn evaluated node logs into abstract render trees with
minimal parenthesization.
"""
from typing import Protocol, runtime_checkable

from contracts import EvalResult, RenderedLine, RowFragment


@runtime_checkable
class Renderer(Protocol):
    def render(self, result: EvalResult) -> list[RenderedLine]:
        """
        Renders one `<expression> = <value>` line per index in
        result.top_level, in order. Works on partial (ok=False) results.
        Pure: rendering the same result twice yields equal lines.
        """
        ...

    def render_node(self, result: EvalResult, index: int) -> RowFragment:
        """
        Renders the expression tree behind a single node index.
        Raises IndexError if the index is outside the node log.
        """
        ...
