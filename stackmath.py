#!/usr/bin/env python3
"""
stackmath.py — StackMath CLI.

Evaluates RPN programs locally and prints every result left on the stack
as `<expression> = <value>`.

Configuration: environment variables with the STACKMATH_ prefix
or a .env file (e.g. STACKMATH_LOG_LEVEL=DEBUG).

Subcommands:
    run      — evaluate and print equations as plain text
    render   — print equations as text, MathML or a JSON render tree
    nodes    — table of the node log (kind, arguments, value)
    tokens   — show how the program is tokenized
    share    — encode the program as a URL fragment

Usage:
    python stackmath.py run --text "1 2 3 * 4 / - 5 +"
    python stackmath.py render --format mathml --text "2 sqrt =r r r *"
    python stackmath.py nodes --text "5 =x x x +"
    python stackmath.py run --fragment "1_2_3_*_4_/_-_5_+"
    echo "PI 2 /" | python stackmath.py run
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from adapters.evaluator.stack_evaluator import StackEvaluator
from adapters.lexer import tokenize
from adapters.presentation import MathMLPresenter, PlainTextPresenter
from adapters.presentation._format import format_number
from adapters.renderer.precedence_renderer import NestingTooDeep, PrecedenceRenderer
from adapters.share_link import from_fragment, to_fragment
from config import Settings
from contracts import ApplyNode, BindNode, EvalResult, LiteralNode, RenderedLine, VarRefNode


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _read_text(args: argparse.Namespace, settings: Settings) -> str:
    if getattr(args, "fragment", None) is not None:
        return from_fragment(args.fragment, default=settings.default_program)
    if getattr(args, "text", None):
        return args.text
    if sys.stdin.isatty():
        return settings.default_program
    return sys.stdin.read().strip()


def _describe(result: EvalResult, index: int) -> tuple[str, str]:
    """(kind, detail) of one node for the node table."""
    node = result.nodes[index]
    if isinstance(node, LiteralNode):
        return "literal", format_number(node.value)
    if isinstance(node, ApplyNode):
        args = ", ".join(f"#{a}" for a in node.args)
        return "apply", f"{node.op}({args})" if node.args else node.op
    if isinstance(node, BindNode):
        return "bind", f"{node.name} ≔ #{node.source}"
    if isinstance(node, VarRefNode):
        return "var_ref", node.name
    return type(node).__name__, ""


def _print_nodes_table(result: EvalResult) -> None:
    table = Table(
        title=f"Nodes [{len(result.nodes)}]",
        box=box.ASCII,
        show_lines=False,
    )
    table.add_column("#", justify="right", no_wrap=True, style="cyan")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Node")
    table.add_column("Value", justify="right", no_wrap=True)
    table.add_column("Top", justify="center", no_wrap=True)
    top = set(result.top_level)
    for index in range(len(result.nodes)):
        kind, detail = _describe(result, index)
        table.add_row(
            str(index),
            kind,
            _safe_terminal_text(detail),
            _safe_terminal_text(format_number(result.values[index])),
            "yes" if index in top else "",
        )
    _console().print(table)


def _render_lines(result: EvalResult, settings: Settings) -> list[RenderedLine] | None:
    try:
        return PrecedenceRenderer(max_depth=settings.max_nesting).render(result)
    except NestingTooDeep as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _report_error(result: EvalResult) -> int:
    if result.ok:
        return 0
    print(f"Error: {result.error.message}", file=sys.stderr)
    return 1


# -- podkomendy ------------------------------------------------------------

def _run(args: argparse.Namespace, settings: Settings) -> int:
    result = StackEvaluator().evaluate_text(_read_text(args, settings))
    lines = _render_lines(result, settings)
    if lines is None:
        return 1
    presenter = PlainTextPresenter()
    for line in lines:
        print(_safe_terminal_text(presenter.present(line)))
    return _report_error(result)


def _render(args: argparse.Namespace, settings: Settings) -> int:
    fmt = args.format or settings.default_format
    result = StackEvaluator().evaluate_text(_read_text(args, settings))
    lines = _render_lines(result, settings)
    if lines is None:
        return 1

    if fmt == "tree":
        print(json.dumps(
            [line.model_dump(mode="json") for line in lines],
            ensure_ascii=False,
            indent=2,
        ))
    else:
        presenter = MathMLPresenter() if fmt == "mathml" else PlainTextPresenter()
        for line in lines:
            print(_safe_terminal_text(presenter.present(line)))
    return _report_error(result)


def _nodes(args: argparse.Namespace, settings: Settings) -> int:
    result = StackEvaluator().evaluate_text(_read_text(args, settings))
    _print_nodes_table(result)
    if result.environment:
        print("bindings:")
        for name, value in result.environment.items():
            print(f"  {name} = {format_number(value)}")
    return _report_error(result)


def _tokens(args: argparse.Namespace, settings: Settings) -> int:
    for token in tokenize(_read_text(args, settings)):
        print(token)
    return 0


def _share(args: argparse.Namespace, settings: Settings) -> int:
    print(f"#{to_fragment(_read_text(args, settings))}")
    return 0


# -- main ------------------------------------------------------------------

def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--text", "-t", help="Program RPN (lub stdin)")
    p.add_argument("--fragment", "-F", help="Program zakodowany jako fragment URL")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="stackmath",
        description="StackMath — RPN evaluator with precedence-aware rendering",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # run
    p = sub.add_parser("run", help="Ewaluuj program i wypisz równania")
    _add_source_args(p)

    # render
    p = sub.add_parser("render", help="Wypisz równania jako tekst, MathML lub drzewo JSON")
    _add_source_args(p)
    p.add_argument("--format", "-f", choices=["text", "mathml", "tree"], default=None)

    # nodes
    p = sub.add_parser("nodes", help="Tabela węzłów i wartości")
    _add_source_args(p)

    # tokens
    p = sub.add_parser("tokens", help="Pokaż tokeny programu")
    _add_source_args(p)

    # share
    p = sub.add_parser("share", help="Zakoduj program jako fragment URL")
    _add_source_args(p)

    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    commands = {
        "run":    _run,
        "render": _render,
        "nodes":  _nodes,
        "tokens": _tokens,
        "share":  _share,
    }
    sys.exit(commands[args.command](args, settings))


if __name__ == "__main__":
    main()
