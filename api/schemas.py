"""
schemas.py — FastAPI request/response models.
Kept apart from contracts.py so the API can evolve independently.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from contracts import EvalError, EvalResult, ExprNode, RowFragment

OutputFormat = Literal["tree", "mathml", "text"]


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=100_000)


class EvaluateResponse(EvalResult):
    pass


# ─────────────────────────── /render ─────────────────────────────

class RenderRequest(BaseModel):
    text: str = Field(..., max_length=100_000)
    format: Optional[OutputFormat] = None   # None = Settings.default_format


class RenderedOutput(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="strings")

    index: int
    value: float
    text: Optional[str] = None
    mathml: Optional[str] = None
    tree: Optional[RowFragment] = None


class RenderResponse(BaseModel):
    ok: bool
    format: OutputFormat
    lines: list[RenderedOutput]
    error: Optional[EvalError] = None


class NodeRenderRequest(BaseModel):
    text: str = Field(..., max_length=100_000)
    index: int = Field(..., ge=0)


class NodeRenderResponse(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="strings")

    index: int
    value: float
    node: ExprNode
    tree: RowFragment
    text: str


# ─────────────────────────── /share ──────────────────────────────

class ShareResponse(BaseModel):
    fragment: str
    text: str


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
