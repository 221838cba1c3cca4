"""
Adapter: StackEvaluator
Implementuje port Evaluator — maszyna stosowa dla programów RPN.

Stos operandów trzyma indeksy węzłów, nie wartości: renderer odtwarza z indeksu
całe drzewo wyrażenia i jego klasę precedencji.

Klasyfikacja tokenu (w tej kolejności):
  liczba     — LiteralNode
  =name      — BindNode, zapis do środowiska (snapshot wartości)
  $name      — zarezerwowane, zawsze błąd
  builtin    — ApplyNode, zdejmuje `arity` operandów
  inaczej    — VarRefNode, odczyt ze środowiska

Pierwszy błąd zatrzymuje ewaluację; wynik zawiera wszystko policzone wcześniej.
"""
from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from adapters.builtins import BUILTINS, Builtin, lookup
from adapters.lexer import tokenize
from contracts import (
    ApplyNode,
    BindNode,
    ErrorKind,
    EvalError,
    EvalResult,
    ExprNode,
    LiteralNode,
    VarRefNode,
)

logger = logging.getLogger("stackmath.evaluator")

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


class EvaluationFailed(Exception):
    """Internal signal: carries the diagnostic of the failing token."""

    def __init__(self, error: EvalError) -> None:
        super().__init__(error.message)
        self.error = error


class _Run:
    """State of a single evaluation: logs, operand stack, environment."""

    def __init__(self) -> None:
        self.nodes: list[ExprNode] = []
        self.values: list[float] = []
        self.stack: list[int] = []
        self.env: dict[str, float] = {}

    def push(self, node: ExprNode, value: float) -> None:
        self.nodes.append(node)
        self.values.append(value)
        self.stack.append(len(self.nodes) - 1)


class StackEvaluator:
    """Ewaluator RPN z wiązaniem zmiennych i wspólnymi podwyrażeniami."""

    def __init__(self, registry: Mapping[str, Builtin] = BUILTINS) -> None:
        self._registry = registry

    # -- Evaluator protocol ------------------------------------------------

    def evaluate(self, tokens: list[str]) -> EvalResult:
        run = _Run()
        error: Optional[EvalError] = None
        for token in tokens:
            try:
                self._step(run, token)
            except EvaluationFailed as exc:
                error = exc.error
                logger.debug("Evaluation stopped at %r: %s", token, error.message)
                break

        return EvalResult(
            ok=error is None,
            tokens=list(tokens),
            nodes=run.nodes,
            values=run.values,
            top_level=list(run.stack),
            environment=dict(run.env),
            error=error,
        )

    def evaluate_text(self, text: str) -> EvalResult:
        return self.evaluate(tokenize(text))

    # -- Prywatne ----------------------------------------------------------

    def _step(self, run: _Run, token: str) -> None:
        if _NUMBER_RE.match(token):
            value = float(token)
            run.push(LiteralNode(value=value), value)
            return

        if token.startswith("=") and len(token) > 1:
            self._assign(run, token, token[1:])
            return

        if token.startswith("$"):
            name = token[1:]
            if name not in run.env:
                raise _unknown_variable(token, name)
            raise EvaluationFailed(EvalError(
                kind=ErrorKind.UNIMPLEMENTED_FEATURE,
                token=token,
                name=token,
                message=f"Not implemented: {token}",
            ))

        builtin = lookup(token, self._registry)
        if builtin is not None:
            self._apply(run, token, builtin)
            return

        if token not in run.env:
            raise _unknown_variable(token, token)
        run.push(VarRefNode(name=token), run.env[token])

    def _assign(self, run: _Run, token: str, name: str) -> None:
        if not run.stack:
            raise EvaluationFailed(EvalError(
                kind=ErrorKind.EMPTY_STACK_ON_ASSIGNMENT,
                token=token,
                name=name,
                message=f"Nothing on the stack to assign to {name}",
            ))
        source = run.stack.pop()
        value = run.values[source]
        run.push(BindNode(name=name, source=source), value)
        run.env[name] = value

    def _apply(self, run: _Run, token: str, builtin: Builtin) -> None:
        if not callable(builtin.fn):
            raise EvaluationFailed(EvalError(
                kind=ErrorKind.UNKNOWN_OPERATOR,
                token=token,
                name=builtin.name,
                message=f"Unknown operator: {builtin.name}",
            ))

        have = len(run.stack)
        if have < builtin.arity:
            raise EvaluationFailed(EvalError(
                kind=ErrorKind.INSUFFICIENT_OPERANDS,
                token=token,
                name=builtin.name,
                needed=builtin.arity,
                have=have,
                message=(
                    f"Not enough operands for operator {builtin.name}: "
                    f"needs {builtin.arity}, have {have}"
                ),
            ))

        # first popped = last argument
        args = [run.stack.pop() for _ in range(builtin.arity)][::-1]
        result = builtin(*(run.values[a] for a in args))
        run.push(ApplyNode(op=builtin.name, args=args), result)


def _unknown_variable(token: str, name: str) -> EvaluationFailed:
    return EvaluationFailed(EvalError(
        kind=ErrorKind.UNKNOWN_VARIABLE,
        token=token,
        name=name,
        message=f"Unknown variable: {name}",
    ))
