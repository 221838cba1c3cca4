"""
Router: POST /evaluate
Runs the stack machine and returns the full node/value log.
Evaluation errors are not HTTP errors: the response carries ok=false,
the partial result and the diagnostic.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from api.dependencies import get_evaluator, get_settings, tokens_within_limit
from api.schemas import EvaluateRequest, EvaluateResponse

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse)
async def evaluate(
    body: EvaluateRequest,
    settings=Depends(get_settings),
    evaluator=Depends(get_evaluator),
) -> EvaluateResponse:
    result = evaluator.evaluate(tokens_within_limit(body.text, settings))
    return EvaluateResponse(**result.model_dump())
