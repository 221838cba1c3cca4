"""
api/main.py — FastAPI entry point.

Lifespan:
  - Builds the stateless adapters once (StackEvaluator, PrecedenceRenderer,
    presenters) and keeps them on app.state
  - Every request still evaluates from scratch; nothing is shared between runs
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from adapters.evaluator.stack_evaluator import StackEvaluator
from adapters.presentation import MathMLPresenter, PlainTextPresenter
from adapters.renderer.precedence_renderer import PrecedenceRenderer
from api.routers import evaluate, render, share
from api.schemas import HealthResponse
from config import Settings

logger = logging.getLogger("stackmath.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.evaluator = StackEvaluator()
    app.state.renderer = PrecedenceRenderer(max_depth=app.state.settings.max_nesting)
    app.state.mathml_presenter = MathMLPresenter()
    app.state.text_presenter = PlainTextPresenter()

    logger.info("StackMath API ready.")
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)
    app.include_router(render.router)
    app.include_router(share.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health(request: Request):
        return HealthResponse(status="ok", version=request.app.state.settings.app_version)

    return app


app = create_app()
