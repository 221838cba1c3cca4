"""
dependencies.py — FastAPI dependency injection.
Each dependency returns its adapter from Request.app.state.
"""
from __future__ import annotations

from fastapi import HTTPException, Request

from adapters.evaluator.stack_evaluator import StackEvaluator
from adapters.lexer import tokenize
from adapters.presentation import MathMLPresenter, PlainTextPresenter
from adapters.renderer.precedence_renderer import PrecedenceRenderer
from config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_evaluator(request: Request) -> StackEvaluator:
    return request.app.state.evaluator


def get_renderer(request: Request) -> PrecedenceRenderer:
    return request.app.state.renderer


def get_mathml_presenter(request: Request) -> MathMLPresenter:
    return request.app.state.mathml_presenter


def get_text_presenter(request: Request) -> PlainTextPresenter:
    return request.app.state.text_presenter


def tokens_within_limit(text: str, settings: Settings) -> list[str]:
    """Tokenizuje program; 413 gdy przekracza Settings.max_tokens."""
    tokens = tokenize(text)
    if len(tokens) > settings.max_tokens:
        raise HTTPException(
            status_code=413,
            detail=f"Program has {len(tokens)} tokens, limit is {settings.max_tokens}",
        )
    return tokens
