"""
Port: Evaluator
Responsibility: run an RPN token sequence on a stack machine and keep every
intermediate result addressable by node index.
"""
from typing import Protocol, runtime_checkable

from contracts import EvalResult


@runtime_checkable
class Evaluator(Protocol):
    def evaluate(self, tokens: list[str]) -> EvalResult:
        """
        Evaluates tokens left to right against a fresh environment.

        Returns EvalResult with:
          - nodes / values: append-only logs, values[i] belongs to nodes[i]
          - top_level: node indices left on the operand stack, program order
          - environment: final variable bindings
          - error: diagnostic of the first failing token (ok=False)

        Never raises; on failure everything computed before the failing
        token is kept in the result.
        """
        ...

    def evaluate_text(self, text: str) -> EvalResult:
        """Tokenizes `text` on whitespace and evaluates the tokens."""
        ...
